"""
Wishlist Endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from teestore.core.database.entities.wishlists import WishlistItem
from teestore.core.models.io.carts import CartItemCreate, CartRead
from teestore.core.models.io.common import Message
from teestore.core.models.io.products import ProductRead
from teestore.core.models.io.wishlists import (
    MoveToCart,
    WishlistAdd,
    WishlistContains,
    WishlistCount,
    WishlistEntry,
    WishlistRead,
)
from teestore.server.services.carts import CartService
from teestore.server.services.deps import CurrentUser, PricingDep, ReposDep

router = APIRouter()


async def _wishlist(user_id: int, repos) -> WishlistRead:
    items = await repos.wishlists.list_for_user(user_id)
    products = {product.id: product for product in await repos.products.list_by_ids([i.product_id for i in items])}
    entries = [
        WishlistEntry(product=ProductRead.from_entity(products[item.product_id]), added_at=item.added_at)
        for item in items
        if item.product_id in products and not products[item.product_id].is_deleted
    ]
    return WishlistRead(items=entries, count=len(entries))


@router.get("", response_model=WishlistRead, summary="Get Wishlist")
async def get_wishlist(user: CurrentUser, repos: ReposDep) -> WishlistRead:
    return await _wishlist(user.id, repos)


@router.post(
    "",
    response_model=WishlistRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add to Wishlist",
    description="Save a product. Adding a product already saved changes nothing.",
    responses={404: {"description": "Product not found"}},
)
async def add_to_wishlist(data: WishlistAdd, user: CurrentUser, repos: ReposDep) -> WishlistRead:
    if await repos.products.get_available(data.product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if await repos.wishlists.get_for_user(user.id, data.product_id) is None:
        await repos.wishlists.create(WishlistItem(user_id=user.id, product_id=data.product_id))
    return await _wishlist(user.id, repos)


@router.get("/count", response_model=WishlistCount, summary="Wishlist Size")
async def wishlist_count(user: CurrentUser, repos: ReposDep) -> WishlistCount:
    return WishlistCount(count=await repos.wishlists.count({"user_id": user.id}))


@router.get("/contains/{product_id}", response_model=WishlistContains, summary="Is Product Saved")
async def wishlist_contains(product_id: int, user: CurrentUser, repos: ReposDep) -> WishlistContains:
    return WishlistContains(in_wishlist=await repos.wishlists.get_for_user(user.id, product_id) is not None)


@router.delete(
    "/{product_id}",
    response_model=WishlistRead,
    summary="Remove from Wishlist",
    responses={404: {"description": "Product not in wishlist"}},
)
async def remove_from_wishlist(product_id: int, user: CurrentUser, repos: ReposDep) -> WishlistRead:
    item = await repos.wishlists.get_for_user(user.id, product_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Product not in wishlist")
    await repos.wishlists.delete(item.id)
    return await _wishlist(user.id, repos)


@router.delete("", response_model=Message, summary="Clear Wishlist")
async def clear_wishlist(user: CurrentUser, repos: ReposDep) -> Message:
    await repos.wishlists.clear(user.id)
    await repos.session.commit()
    return Message(message="Wishlist cleared")


@router.post(
    "/{product_id}/move-to-cart",
    response_model=CartRead,
    summary="Move to Cart",
    description="Add a saved product to the cart in the chosen size and remove it from the wishlist.",
    responses={404: {"description": "Product not in wishlist"}},
)
async def move_to_cart(
    product_id: int, data: MoveToCart, user: CurrentUser, repos: ReposDep, pricing: PricingDep
) -> CartRead:
    item = await repos.wishlists.get_for_user(user.id, product_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Product not in wishlist")
    carts = CartService(repos, pricing)
    await carts.add(
        user.id,
        CartItemCreate(product_id=product_id, size=data.size, color=data.color, quantity=data.quantity),
    )
    await repos.wishlists.delete(item.id)
    return await carts.get_cart(user.id)
