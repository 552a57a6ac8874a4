"""
Order I/O models.

Schemas for quoting and placing orders, reading them back and the admin
status and shipping updates.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from teestore.core.models.domain.enums import OrderStatus, PaymentMethod

from .carts import CartItemCreate
from .common import Pagination


class ShippingInfo(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    phone: str = Field(max_length=20)
    pincode: str = Field(max_length=10)
    city: str
    state: str
    country: str = "India"


class PaymentConfirmation(BaseModel):
    """Values returned by the Razorpay checkout widget."""

    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str


class QuoteRequest(BaseModel):
    """What the customer intends to buy and how they want to pay."""

    items: Optional[List[CartItemCreate]] = Field(
        default=None, description="Lines to buy; omit and set from_cart to buy the cart"
    )
    from_cart: bool = False
    coupon_code: Optional[str] = None
    reward_points: int = Field(default=0, ge=0)
    payment_method: PaymentMethod = PaymentMethod.razorpay
    shipping_cost: int = Field(default=0, ge=0, description="Selected courier rate, waived above the free threshold")

    @model_validator(mode="after")
    def check_source(self) -> "QuoteRequest":
        if not self.from_cart and not self.items:
            raise ValueError("Provide items or set from_cart")
        return self


class OrderCreate(QuoteRequest):
    """Schema for placing an order."""

    payment: Optional[PaymentConfirmation] = None
    shipping: ShippingInfo
    address: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_payment(self) -> "OrderCreate":
        if self.payment_method == PaymentMethod.razorpay and self.payment is None:
            raise ValueError("Online orders need the payment confirmation")
        return self


class OrderItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: Optional[int] = None
    name: str
    size: str
    color: Optional[str] = None
    price: int
    count: int
    photo_url: Optional[str] = None
    is_custom: bool
    customization: Optional[dict] = None


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    status: str
    payment_method: str
    payment_status: str
    transaction_id: Optional[str] = None
    gateway_order_id: Optional[str] = None
    subtotal: int
    quantity_discount: int
    quantity_discount_percentage: int
    coupon_code: Optional[str] = None
    coupon_discount: int
    reward_points_redeemed: int
    reward_discount: float
    online_payment_discount: int
    shipping_cost: int
    amount: float
    reward_points_earned: int
    address: str
    shipping: dict = Field(default_factory=dict)
    items: List[OrderItemRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class OrderPage(BaseModel):
    orders: List[OrderRead]
    pagination: Pagination


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class ShippingUpdate(BaseModel):
    courier: Optional[str] = None
    tracking_id: Optional[str] = None
    shipment_id: Optional[str] = None
    awb_code: Optional[str] = None
    estimated_delivery: Optional[datetime] = None


class DiscountBreakdown(BaseModel):
    """Stored pricing of an order, as displayed on receipts."""

    subtotal: int
    quantity_discount: int
    quantity_discount_percentage: int
    coupon_code: Optional[str] = None
    coupon_discount: int
    reward_points_used: int
    reward_discount: float
    online_payment_discount: int
    shipping_cost: int
    total_savings: float
    final_amount: float
    item_count: int
