"""Payment gateway integrations."""

from .razorpay import RazorpayClient, get_razorpay_client

__all__ = ["RazorpayClient", "get_razorpay_client"]
