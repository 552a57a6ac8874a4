"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances bound
to one session, so services can compose several repositories inside a
single transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .carts import CartRepository
from .categories import CategoryRepository
from .coupons import CouponRepository
from .designs import DesignRepository
from .orders import OrderRepository
from .products import ProductRepository
from .rewards import RewardTransactionRepository
from .reviews import ReviewRepository
from .store_settings import StoreSettingRepository
from .users import UserRepository
from .wishlists import WishlistRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    categories: CategoryRepository
    products: ProductRepository
    designs: DesignRepository
    carts: CartRepository
    orders: OrderRepository
    coupons: CouponRepository
    reviews: ReviewRepository
    wishlists: WishlistRepository
    settings: StoreSettingRepository
    rewards: RewardTransactionRepository


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        categories=CategoryRepository(session),
        products=ProductRepository(session),
        designs=DesignRepository(session),
        carts=CartRepository(session),
        orders=OrderRepository(session),
        coupons=CouponRepository(session),
        reviews=ReviewRepository(session),
        wishlists=WishlistRepository(session),
        settings=StoreSettingRepository(session),
        rewards=RewardTransactionRepository(session),
    )
