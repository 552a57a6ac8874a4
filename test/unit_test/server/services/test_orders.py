"""
Unit tests for the order workflow: status transitions, cancellation side
effects, access checks and shipping updates.
"""

import pytest
import pytest_asyncio

from teestore.core.errors import BusinessRuleError, NotFoundError, PermissionDeniedError
from teestore.core.models.domain.enums import OrderStatus
from teestore.core.models.io.orders import OrderCreate, ShippingUpdate
from teestore.server.services.checkout import CheckoutService
from teestore.server.services.orders import OrderService

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def placed_order(repos, pricing, gateway, customer, make_product):
    """A COD order for 3 x M of a 500 rupee tee (1350 after the quantity discount)."""
    product = await make_product(price=500, stock=5)
    order = await CheckoutService(repos, pricing, gateway).place_order(
        customer.id,
        OrderCreate.model_validate(
            {
                "items": [{"product_id": product.id, "size": "M", "quantity": 3}],
                "payment_method": "cod",
                "shipping": {"name": "Asha", "phone": "99", "pincode": "560001", "city": "Bengaluru", "state": "KA"},
                "address": "12 MG Road",
            }
        ),
    )
    return order, product


class TestOrderStatus:
    """Test order status transitions."""

    async def test_forward_transition(self, repos, placed_order):
        order, _ = placed_order

        updated = await OrderService(repos).update_status(order.id, OrderStatus.shipped)

        assert updated.status == "Shipped"

    async def test_same_status_is_a_no_op(self, repos, placed_order):
        order, _ = placed_order

        updated = await OrderService(repos).update_status(order.id, OrderStatus.received)

        assert updated.status == "Received"

    async def test_terminal_status_cannot_change(self, repos, placed_order):
        order, _ = placed_order
        service = OrderService(repos)
        await service.update_status(order.id, OrderStatus.delivered)

        with pytest.raises(BusinessRuleError, match="Delivered"):
            await service.update_status(order.id, OrderStatus.processing)

    async def test_cancel_restocks_and_reverses_points(self, repos, session, customer, placed_order):
        order, product = placed_order
        await session.refresh(customer)
        assert customer.reward_points == 235

        await OrderService(repos).update_status(order.id, OrderStatus.cancelled)

        await session.refresh(product)
        await session.refresh(customer)
        assert product.stock_m == 5
        assert product.sold == 0
        assert customer.reward_points == 100

        transactions = await repos.rewards.list_for_order(order.id)
        assert transactions[-1].type == "admin_adjustment"
        assert transactions[-1].amount == -135

    async def test_cancel_never_drives_points_negative(self, repos, session, customer, placed_order):
        order, _ = placed_order
        await session.refresh(customer)
        customer.reward_points = 30
        await repos.users.update(customer)

        await OrderService(repos).update_status(order.id, OrderStatus.cancelled)

        await session.refresh(customer)
        assert customer.reward_points == 0

    async def test_unknown_order(self, repos):
        with pytest.raises(NotFoundError):
            await OrderService(repos).update_status(999, OrderStatus.shipped)


class TestOrderAccess:
    async def test_owner_and_admin_can_read(self, repos, customer, admin, placed_order):
        order, _ = placed_order
        service = OrderService(repos)

        assert (await service.get_for(order.id, customer)).id == order.id
        assert (await service.get_for(order.id, admin)).id == order.id

    async def test_other_customer_is_denied(self, repos, other_customer, placed_order):
        order, _ = placed_order

        with pytest.raises(PermissionDeniedError):
            await OrderService(repos).get_for(order.id, other_customer)

    async def test_read_includes_items_and_breakdown(self, repos, placed_order):
        order, _ = placed_order
        service = OrderService(repos)

        data = await service.read(order)
        breakdown = service.breakdown(order, await repos.orders.get_items(order.id))

        assert len(data.items) == 1
        assert data.items[0].count == 3
        assert breakdown.item_count == 3
        assert breakdown.total_savings == 150
        assert breakdown.final_amount == 1350


class TestShippingUpdate:
    async def test_tracking_is_merged_into_shipping(self, repos, placed_order):
        order, _ = placed_order

        updated = await OrderService(repos).update_shipping(
            order.id, ShippingUpdate(courier="Delhivery", tracking_id="TRK123")
        )

        assert updated.shipping["courier"] == "Delhivery"
        assert updated.shipping["tracking_id"] == "TRK123"
        assert updated.shipping["city"] == "Bengaluru"
        assert "awb_code" not in updated.shipping
