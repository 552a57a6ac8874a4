"""
Payment I/O models.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel

from .incentives import CheckoutQuote


class GatewayOrder(BaseModel):
    id: str
    amount: int
    currency: str
    receipt: str


class PaymentOrderResponse(BaseModel):
    """Gateway order the checkout widget is opened with."""

    order: GatewayOrder
    key_id: str
    quote: CheckoutQuote


class PaymentVerifyResponse(BaseModel):
    verified: bool
    payment: Optional[Dict[str, Any]] = None


class WebhookAck(BaseModel):
    status: str
    event: Optional[str] = None
