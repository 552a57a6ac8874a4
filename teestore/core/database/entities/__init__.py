"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships.

Modules:
- users: Accounts, saved addresses and reward balance
- categories: Category tree
- products: Catalogue products with per-size stock
- designs: Studio artwork
- carts: Shopping cart lines
- orders: Orders and ordered items
- coupons: Coupons and their redemptions
- reviews: Product reviews
- wishlists: Saved products
- store_settings: Runtime key/value settings
- rewards: Reward points ledger
"""

from . import (
    carts,
    categories,
    coupons,
    designs,
    orders,
    products,
    rewards,
    reviews,
    store_settings,
    users,
    wishlists,
)

__all__ = [
    "carts",
    "categories",
    "coupons",
    "designs",
    "orders",
    "products",
    "rewards",
    "reviews",
    "store_settings",
    "users",
    "wishlists",
]
