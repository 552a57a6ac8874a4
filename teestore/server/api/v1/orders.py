"""
Order Endpoints.

Order placement, the customer's order history and the admin fulfilment
workflow (status and shipping updates).
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from teestore.core.database.repositories.base import QueryBuilder
from teestore.core.models.domain.enums import OrderStatus
from teestore.core.models.io.common import Pagination
from teestore.core.models.io.orders import (
    DiscountBreakdown,
    OrderCreate,
    OrderPage,
    OrderRead,
    OrderStatusUpdate,
    ShippingUpdate,
)
from teestore.server.services.checkout import CheckoutService
from teestore.server.services.deps import AdminUser, CurrentUser, GatewayDep, PricingDep, ReposDep
from teestore.server.services.orders import OrderService

router = APIRouter()


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Place Order",
    description="""
    Place an order from the cart or the given items. Online payments must
    carry a valid Razorpay signature. Stock is reserved atomically; when any
    size runs out nothing is saved.
    """,
    responses={
        400: {"description": "Empty order or unusable coupon"},
        402: {"description": "Payment verification failed"},
        409: {"description": "Insufficient stock or payment already used"},
    },
)
async def place_order(
    data: OrderCreate, user: CurrentUser, repos: ReposDep, pricing: PricingDep, gateway: GatewayDep
) -> OrderRead:
    order = await CheckoutService(repos, pricing, gateway).place_order(user.id, data)
    return await OrderService(repos).read(order)


@router.get(
    "",
    response_model=OrderPage,
    summary="List Orders",
    description="Admin listing of all orders, optionally with one status, newest first.",
)
async def list_orders(
    admin: AdminUser,
    repos: ReposDep,
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> OrderPage:
    orders, total = await repos.orders.list_filtered(
        order_status.value if order_status else None, limit=limit, offset=QueryBuilder.page_offset(page, limit)
    )
    return OrderPage(orders=await OrderService(repos).read_many(orders), pagination=Pagination.build(page, limit, total))


@router.get("/mine", response_model=List[OrderRead], summary="My Orders")
async def my_orders(user: CurrentUser, repos: ReposDep) -> List[OrderRead]:
    return await OrderService(repos).read_many(await repos.orders.list_for_user(user.id))


@router.get("/statuses", response_model=List[str], summary="Order Statuses")
async def order_statuses() -> List[str]:
    return [member.value for member in OrderStatus]


@router.get(
    "/{order_id}",
    response_model=OrderRead,
    summary="Get Order",
    description="An order of the caller; admins can read any order.",
    responses={403: {"description": "Not your order"}, 404: {"description": "Order not found"}},
)
async def get_order(order_id: int, user: CurrentUser, repos: ReposDep) -> OrderRead:
    service = OrderService(repos)
    return await service.read(await service.get_for(order_id, user))


@router.get(
    "/{order_id}/breakdown",
    response_model=DiscountBreakdown,
    summary="Discount Breakdown",
    description="The pricing stored at checkout, as shown on receipts.",
)
async def order_breakdown(order_id: int, user: CurrentUser, repos: ReposDep) -> DiscountBreakdown:
    service = OrderService(repos)
    order = await service.get_for(order_id, user)
    return service.breakdown(order, await repos.orders.get_items(order.id))


@router.put(
    "/{order_id}/status",
    response_model=OrderRead,
    summary="Update Status",
    description="Delivered and Cancelled are final. Cancelling restocks items and takes back earned points.",
    responses={400: {"description": "Order already final"}},
)
async def update_status(order_id: int, data: OrderStatusUpdate, admin: AdminUser, repos: ReposDep) -> OrderRead:
    service = OrderService(repos)
    return await service.read(await service.update_status(order_id, data.status))


@router.put("/{order_id}/shipping", response_model=OrderRead, summary="Update Shipping")
async def update_shipping(order_id: int, data: ShippingUpdate, admin: AdminUser, repos: ReposDep) -> OrderRead:
    service = OrderService(repos)
    return await service.read(await service.update_shipping(order_id, data))
