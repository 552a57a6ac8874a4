"""
Checkout service.

Quotes prospective orders and places them. Placement is one unit of work:
payment verification, stock reservation, the order and its items, coupon
usage, reward point movements, design usage and clearing the cart are
committed together or not at all.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from teestore.core.database.base import utc_now
from teestore.core.database.entities.coupons import Coupon
from teestore.core.database.entities.orders import Order
from teestore.core.database.entities.rewards import RewardTransaction
from teestore.core.database.entities.users import User
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import BusinessRuleError, ConflictError, NotFoundError, PaymentVerificationError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import PaymentMethod, PaymentStatus, RewardTransactionType
from teestore.core.models.io.incentives import CheckoutQuote
from teestore.core.models.io.orders import OrderCreate, QuoteRequest
from teestore.core.models.io.payments import GatewayOrder, PaymentOrderResponse
from teestore.core.monitoring import log_order_placed, log_payment_verified
from teestore.payments.razorpay import RazorpayClient
from teestore.server.core.config import PricingConfig

from .carts import CartService, ResolvedLine
from .coupons import CouponService
from .incentives import IncentiveService
from .inventory import InventoryService
from .pricing import build_quote, round_half_up, subtotal

logger = get_logger(__name__)

# Default parcel dimensions for a folded t-shirt (kg / cm)
DEFAULT_PARCEL = {"weight": 0.3, "length": 28, "breadth": 22, "height": 5}


@dataclass
class PreparedCheckout:
    lines: List[ResolvedLine]
    coupon: Optional[Coupon]
    quote: CheckoutQuote


class CheckoutService:
    """Pricing and placement of orders."""

    def __init__(self, repos: RepoBundle, pricing: PricingConfig, gateway: RazorpayClient) -> None:
        self.repos = repos
        self.pricing = pricing
        self.gateway = gateway
        self.carts = CartService(repos, pricing)
        self.coupons = CouponService(repos)
        self.inventory = InventoryService(repos)

    async def _lines(self, user: User, request: QuoteRequest) -> List[ResolvedLine]:
        if request.from_cart:
            lines = await self.carts.resolve_cart(user.id)
        else:
            lines = [await self.carts.resolve(item) for item in request.items or []]
        if not lines:
            raise BusinessRuleError("Cart is empty")
        return lines

    async def prepare(self, user: User, request: QuoteRequest, now: Optional[datetime] = None) -> PreparedCheckout:
        """Resolve the lines, validate the coupon and price the order."""
        now = now or utc_now()
        lines = await self._lines(user, request)
        price_lines = [line.price_line() for line in lines]

        coupon = None
        if request.coupon_code:
            coupon = await self.coupons.validate(request.coupon_code, subtotal(price_lines), user.id, now)

        configs = await IncentiveService(self.repos.settings).load()
        quote = build_quote(
            price_lines,
            pricing=self.pricing,
            quantity_config=configs.quantity,
            shipping_config=configs.shipping,
            loyalty_config=configs.loyalty,
            payment_method=request.payment_method,
            shipping_rate=request.shipping_cost,
            coupon=coupon,
            reward_points_requested=request.reward_points,
            reward_balance=user.reward_points,
            now=now,
        )
        return PreparedCheckout(lines=lines, coupon=coupon, quote=quote)

    async def quote(self, user: User, request: QuoteRequest) -> CheckoutQuote:
        return (await self.prepare(user, request)).quote

    async def create_payment_order(self, user: User, request: QuoteRequest) -> PaymentOrderResponse:
        """Open a gateway order for the quoted amount."""
        quote = await self.quote(user, request)
        receipt = f"receipt_{int(time.time() * 1000)}"
        gateway_order = await self.gateway.create_order(
            amount_paise=round_half_up(quote.amount * 100),
            receipt=receipt,
            notes={"user_id": str(user.id)},
        )
        logger.info(f"Gateway order {gateway_order['id']} created for user {user.id}, amount {quote.amount}")
        return PaymentOrderResponse(
            order=GatewayOrder.model_validate(gateway_order),
            key_id=self.gateway.key_id,
            quote=quote,
        )

    def _verify_payment(self, data: OrderCreate) -> None:
        payment = data.payment
        verified = self.gateway.verify_payment_signature(
            payment.razorpay_order_id, payment.razorpay_payment_id, payment.razorpay_signature
        )
        log_payment_verified(payment.razorpay_order_id, payment.razorpay_payment_id, verified)
        if not verified:
            logger.warning(f"Payment signature mismatch for gateway order {payment.razorpay_order_id}")
            raise PaymentVerificationError("Payment verification failed")

    async def _verify_amount(self, data: OrderCreate, quote: CheckoutQuote) -> None:
        """The gateway order must have been opened for exactly this order's amount."""
        if self.gateway.mock_mode:
            return
        gateway_order_id = data.payment.razorpay_order_id
        gateway_order = await self.gateway.fetch_order(gateway_order_id)
        expected = round_half_up(quote.amount * 100)
        if gateway_order.get("amount") != expected:
            logger.warning(
                f"Gateway order {gateway_order_id} was opened for {gateway_order.get('amount')} paise, "
                f"order amount is {expected} paise"
            )
            raise PaymentVerificationError("Payment amount does not match the order amount")

    async def place_order(self, user_id: int, data: OrderCreate) -> Order:
        """Place an order for a user.

        Raises:
            BusinessRuleError: Empty order, unusable coupon, or the coupon limit
                or reward balance was used up by a concurrent order
            PaymentVerificationError: Online payment signature or amount does not verify
            InsufficientStockError: A size ran out; nothing is persisted
        """
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        # the balance is moved by UPDATE statements, reload it
        await self.repos.session.refresh(user)

        online = data.payment_method == PaymentMethod.razorpay
        if online:
            self._verify_payment(data)
            if await self.repos.orders.get_by_gateway_order_id(data.payment.razorpay_order_id) is not None:
                raise ConflictError("An order was already placed for this payment")

        prepared = await self.prepare(user, data)
        quote = prepared.quote
        coupon = prepared.coupon if quote.coupon_discount > 0 else None
        if online:
            await self._verify_amount(data, quote)

        try:
            order = Order(
                user_id=user.id,
                payment_method=data.payment_method.value,
                payment_status=(PaymentStatus.paid if online else PaymentStatus.pending).value,
                transaction_id=data.payment.razorpay_payment_id if online else None,
                gateway_order_id=data.payment.razorpay_order_id if online else None,
                subtotal=quote.subtotal,
                quantity_discount=quote.quantity_discount,
                quantity_discount_percentage=quote.quantity_discount_percentage,
                coupon_code=coupon.code if coupon else None,
                coupon_discount_type=coupon.discount_type if coupon else None,
                coupon_discount_value=coupon.discount_value if coupon else None,
                coupon_discount=quote.coupon_discount,
                reward_points_redeemed=quote.reward_points_redeemed,
                reward_discount=quote.reward_discount,
                online_payment_discount=quote.online_payment_discount,
                shipping_cost=quote.shipping_cost,
                amount=quote.amount,
                reward_points_earned=quote.reward_points_to_earn,
                address=data.address,
                shipping={**DEFAULT_PARCEL, **data.shipping.model_dump()},
            )
            await self.repos.orders.add(order)

            items = [line.order_item(order.id) for line in prepared.lines]
            await self.inventory.reserve(items, self.pricing)
            for item in items:
                await self.repos.orders.add_item(item)

            if coupon is not None:
                if await self.repos.coupons.record_usage(coupon, user.id, order.id) is None:
                    raise BusinessRuleError(f"Coupon {coupon.code} has reached its usage limit")

            await self._move_rewards(user, order, quote)

            for line in prepared.lines:
                for design_id in line.design_ids:
                    await self.repos.designs.increment_used(design_id, line.quantity)

            if data.from_cart:
                await self.repos.carts.clear(user.id)

            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

        await self.repos.session.refresh(order)
        logger.info(
            f"Order {order.id} placed by user {user.id}: {quote.item_count} items, "
            f"amount {order.amount}, payment {order.payment_method}"
        )
        log_order_placed(order.id, user.id, order.amount, quote.item_count, order.payment_method)
        return order

    async def _move_rewards(self, user: User, order: Order, quote: CheckoutQuote) -> None:
        """Redeem and earn points with conditional updates on the balance.

        Raises:
            BusinessRuleError: The balance no longer covers the redeemed points
        """
        if quote.reward_points_redeemed > 0:
            updated = await self.repos.users.add_reward_points(user.id, -quote.reward_points_redeemed)
            if updated is None:
                raise BusinessRuleError("Insufficient reward points")
            await self.repos.rewards.add(
                RewardTransaction(
                    user_id=user.id,
                    type=RewardTransactionType.redeemed.value,
                    amount=-quote.reward_points_redeemed,
                    balance=updated.reward_points,
                    description=f"Redeemed on order #{order.id}",
                    order_id=order.id,
                    order_amount=order.amount,
                )
            )
        if quote.reward_points_to_earn > 0:
            updated = await self.repos.users.add_reward_points(user.id, quote.reward_points_to_earn)
            await self.repos.rewards.add(
                RewardTransaction(
                    user_id=user.id,
                    type=RewardTransactionType.earned.value,
                    amount=quote.reward_points_to_earn,
                    balance=updated.reward_points,
                    description=f"Earned on order #{order.id}",
                    order_id=order.id,
                    order_amount=order.amount,
                )
            )
