"""
Cart Endpoints.

The signed-in customer's cart. Prices are computed by the server for both
catalogue products and custom t-shirts.
"""

from fastapi import APIRouter, status

from teestore.core.models.io.carts import CartItemCreate, CartItemUpdate, CartMerge, CartRead
from teestore.core.models.io.common import Message
from teestore.server.services.carts import CartService
from teestore.server.services.deps import CurrentUser, PricingDep, ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=CartRead,
    summary="Get Cart",
    description="Cart lines with the total price and item count.",
)
async def get_cart(user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> CartRead:
    return await CartService(repos, pricing).get_cart(user.id)


@router.post(
    "/items",
    response_model=CartRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add to Cart",
    description="""
    Add a catalogue product (product_id) or a custom t-shirt (customization).
    A line matching an existing one (same product or customization, size and
    color) increases its quantity instead.
    """,
    responses={400: {"description": "Size not offered"}, 404: {"description": "Product or design not found"}},
)
async def add_item(data: CartItemCreate, user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> CartRead:
    service = CartService(repos, pricing)
    await service.add(user.id, data)
    return await service.get_cart(user.id)


@router.put(
    "/items/{item_id}",
    response_model=CartRead,
    summary="Update Quantity",
    description="Set a line's quantity; 0 removes the line.",
    responses={404: {"description": "Cart item not found"}},
)
async def update_item(
    item_id: int, data: CartItemUpdate, user: CurrentUser, repos: ReposDep, pricing: PricingDep
) -> CartRead:
    service = CartService(repos, pricing)
    await service.update_quantity(user.id, item_id, data.quantity)
    return await service.get_cart(user.id)


@router.delete(
    "/items/{item_id}",
    response_model=CartRead,
    summary="Remove Item",
    responses={404: {"description": "Cart item not found"}},
)
async def remove_item(item_id: int, user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> CartRead:
    service = CartService(repos, pricing)
    await service.remove(user.id, item_id)
    return await service.get_cart(user.id)


@router.delete("", response_model=Message, summary="Clear Cart")
async def clear_cart(user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> Message:
    await CartService(repos, pricing).clear(user.id)
    return Message(message="Cart cleared")


@router.post(
    "/merge",
    response_model=CartRead,
    summary="Merge Guest Cart",
    description="Fold lines collected before sign-in into the cart. Lines no longer orderable are skipped.",
)
async def merge_cart(data: CartMerge, user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> CartRead:
    return await CartService(repos, pricing).merge(user.id, data.items)
