"""
Order entity models.

An order stores the full discount breakdown computed at checkout so that it
can be displayed later without recalculation. Ordered lines live in
``order_items``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Field

from ..base import Base, utc_now


class Order(Base, table=True):
    """Placed order with its pricing breakdown and shipping details.

    Table: orders
    """

    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    status: str = Field(default="Received", max_length=16, index=True)

    # Payment
    payment_method: str = Field(default="razorpay", max_length=16)
    payment_status: str = Field(default="pending", max_length=16)
    transaction_id: Optional[str] = Field(default=None, max_length=64)
    gateway_order_id: Optional[str] = Field(default=None, max_length=64, index=True)

    # Pricing breakdown, applied in this order
    subtotal: int = Field(default=0)
    quantity_discount: int = Field(default=0)
    quantity_discount_percentage: int = Field(default=0)
    coupon_code: Optional[str] = Field(default=None, max_length=32)
    coupon_discount_type: Optional[str] = Field(default=None, max_length=16)
    coupon_discount_value: Optional[float] = Field(default=None)
    coupon_discount: int = Field(default=0)
    reward_points_redeemed: int = Field(default=0)
    reward_discount: float = Field(default=0)
    online_payment_discount: int = Field(default=0)
    shipping_cost: int = Field(default=0)
    amount: float = Field(default=0, description="Final amount charged")
    reward_points_earned: int = Field(default=0)

    # Delivery
    address: str = Field(default="")
    # {name, phone, pincode, city, state, country, weight, length, breadth,
    #  height, courier, tracking_id, shipment_id, awb_code, estimated_delivery}
    shipping: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def total_savings(self) -> float:
        return self.quantity_discount + self.coupon_discount + self.reward_discount + self.online_payment_discount

    def __repr__(self) -> str:
        return f"Order(id={self.id}, user_id={self.user_id}, status={self.status}, amount={self.amount})"


class OrderItem(Base, table=True):
    """One ordered line, with the unit price it was sold at.

    Table: order_items
    """

    __tablename__ = "order_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)
    product_id: Optional[int] = Field(default=None, foreign_key="products.id", index=True)

    name: str = Field(max_length=100)
    size: str = Field(max_length=8)
    color: Optional[str] = Field(default=None, max_length=32)
    price: int = Field(ge=0)
    count: int = Field(ge=1)
    photo_url: Optional[str] = Field(default=None, max_length=1024)

    is_custom: bool = Field(default=False)
    customization: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)

    def __repr__(self) -> str:
        return f"OrderItem(order_id={self.order_id}, name={self.name}, size={self.size}, count={self.count})"
