"""
Order management service: reads, status workflow and shipping updates.
"""

from __future__ import annotations

from typing import List

from teestore.core.database.entities.orders import Order, OrderItem
from teestore.core.database.entities.rewards import RewardTransaction
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import OrderStatus, RewardTransactionType
from teestore.core.models.io.orders import DiscountBreakdown, OrderItemRead, OrderRead, ShippingUpdate

from .inventory import InventoryService

logger = get_logger(__name__)


class OrderService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def get(self, order_id: int) -> Order:
        order = await self.repos.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    async def get_for(self, order_id: int, user: User) -> Order:
        """Fetch an order visible to ``user``: their own, or any for admins."""
        order = await self.get(order_id)
        if order.user_id != user.id and not user.is_admin:
            raise PermissionDeniedError("You cannot access this order")
        return order

    async def read(self, order: Order) -> OrderRead:
        data = OrderRead.model_validate(order)
        items = await self.repos.orders.get_items(order.id)
        data.items = [OrderItemRead.model_validate(item) for item in items]
        return data

    async def read_many(self, orders: List[Order]) -> List[OrderRead]:
        return [await self.read(order) for order in orders]

    @staticmethod
    def breakdown(order: Order, items: List[OrderItem]) -> DiscountBreakdown:
        return DiscountBreakdown(
            subtotal=order.subtotal,
            quantity_discount=order.quantity_discount,
            quantity_discount_percentage=order.quantity_discount_percentage,
            coupon_code=order.coupon_code,
            coupon_discount=order.coupon_discount,
            reward_points_used=order.reward_points_redeemed,
            reward_discount=order.reward_discount,
            online_payment_discount=order.online_payment_discount,
            shipping_cost=order.shipping_cost,
            total_savings=order.total_savings,
            final_amount=order.amount,
            item_count=sum(item.count for item in items),
        )

    async def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """Move an order through its workflow.

        Delivered and Cancelled orders are final. Cancelling puts the stock
        back and takes back the points the order earned.
        """
        order = await self.get(order_id)
        current = OrderStatus(order.status)
        if current.is_terminal:
            raise BusinessRuleError(f"Order is already {current.value} and cannot be changed")
        if status == current:
            return order

        try:
            if status == OrderStatus.cancelled:
                items = await self.repos.orders.get_items(order.id)
                await InventoryService(self.repos).restock(items)
                await self._reverse_earning(order)
            order.status = status.value
            self.repos.session.add(order)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

        await self.repos.session.refresh(order)
        logger.info(f"Order {order.id} status {current.value} -> {status.value}")
        return order

    async def _reverse_earning(self, order: Order) -> None:
        if order.reward_points_earned <= 0:
            return
        # points already spent elsewhere are not clawed back below zero
        balance = await self.repos.users.get_reward_points(order.user_id)
        reversed_points = min(order.reward_points_earned, balance)
        if reversed_points <= 0:
            return
        user = await self.repos.users.add_reward_points(order.user_id, -reversed_points)
        if user is None:
            raise BusinessRuleError("Reward balance changed while cancelling, try again")
        await self.repos.rewards.add(
            RewardTransaction(
                user_id=user.id,
                type=RewardTransactionType.admin_adjustment.value,
                amount=-reversed_points,
                balance=user.reward_points,
                description=f"Reversed points of cancelled order #{order.id}",
                order_id=order.id,
                order_amount=order.amount,
            )
        )

    async def update_shipping(self, order_id: int, data: ShippingUpdate) -> Order:
        order = await self.get(order_id)
        shipping = dict(order.shipping or {})
        for key, value in data.model_dump(exclude_unset=True, mode="json").items():
            shipping[key] = value
        order.shipping = shipping
        return await self.repos.orders.update(order)
