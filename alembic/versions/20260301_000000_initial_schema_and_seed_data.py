"""Initial schema and seed data for Teestore

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

This is the initial migration that creates all storefront tables and seeds
the default runtime settings:
- Catalogue tables (categories, products, designs)
- Customer tables (users, cart items, wishlist items, reward transactions)
- Sales tables (orders, order items, coupons, coupon usages, reviews)
- Incentive tiers and the reviews switch in the settings table

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(32), nullable=False),
        sa.Column("lastname", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("userinfo", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("city", sa.String(64), nullable=True),
        sa.Column("state", sa.String(64), nullable=True),
        sa.Column("country", sa.String(64), nullable=True),
        sa.Column("pincode", sa.String(10), nullable=True),
        sa.Column("addresses", sa.JSON(), nullable=False),
        sa.Column("reward_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create categories table
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(32), nullable=False),
        sa.Column("slug", sa.String(64), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("icon", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"], unique=True)
    op.create_index("ix_categories_parent_id", "categories", ["parent_id"])

    # Create products table
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(2500), nullable=False, server_default=""),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("mrp", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("discount_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("subcategory_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("stock_s", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stock_m", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stock_l", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stock_xl", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stock_xxl", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("available_sizes", sa.JSON(), nullable=False),
        sa.Column("total_stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sold", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("low_stock_threshold", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("deleted_by", sa.Integer(), nullable=True),
        sa.Column("average_rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_reviews", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("tags", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_products_name", "products", ["name"])
    op.create_index("ix_products_category_id", "products", ["category_id"])
    op.create_index("ix_products_subcategory_id", "products", ["subcategory_id"])
    op.create_index("ix_products_is_deleted", "products", ["is_deleted"])

    # Create designs table
    op.create_table(
        "designs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(2000), nullable=True),
        sa.Column("slug", sa.String(128), nullable=False),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("placements", sa.JSON(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("aspect_ratio", sa.Float(), nullable=True),
        sa.Column("artist_name", sa.String(100), nullable=True),
        sa.Column("artist_link", sa.String(1024), nullable=True),
        sa.Column("print_file_url", sa.String(1024), nullable=True),
        sa.Column("print_file_format", sa.String(16), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_designs_slug", "designs", ["slug"], unique=True)
    op.create_index("ix_designs_category_id", "designs", ["category_id"])

    # Create cart_items table
    op.create_table(
        "cart_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("customization", sa.JSON(), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("photo_url", sa.String(1024), nullable=True),
        sa.Column("size", sa.String(8), nullable=False),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("added_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_cart_items_user_id", "cart_items", ["user_id"])

    # Create wishlist_items table
    op.create_table(
        "wishlist_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("added_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "product_id", name="uq_wishlist_user_product"),
    )
    op.create_index("ix_wishlist_items_user_id", "wishlist_items", ["user_id"])

    # Create orders table
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="Received"),
        sa.Column("payment_method", sa.String(16), nullable=False, server_default="razorpay"),
        sa.Column("payment_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("transaction_id", sa.String(64), nullable=True),
        sa.Column("gateway_order_id", sa.String(64), nullable=True),
        sa.Column("subtotal", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("quantity_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("quantity_discount_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("coupon_code", sa.String(32), nullable=True),
        sa.Column("coupon_discount_type", sa.String(16), nullable=True),
        sa.Column("coupon_discount_value", sa.Float(), nullable=True),
        sa.Column("coupon_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reward_points_redeemed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reward_discount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("online_payment_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("shipping_cost", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("reward_points_earned", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("address", sa.Text(), nullable=False, server_default=""),
        sa.Column("shipping", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_user_id", "orders", ["user_id"])
    op.create_index("ix_orders_status", "orders", ["status"])
    op.create_index("ix_orders_gateway_order_id", "orders", ["gateway_order_id"])

    # Create order_items table
    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("size", sa.String(8), nullable=False),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column("photo_url", sa.String(1024), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("customization", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])
    op.create_index("ix_order_items_product_id", "order_items", ["product_id"])

    # Create coupons table
    op.create_table(
        "coupons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("discount_type", sa.String(16), nullable=False),
        sa.Column("discount_value", sa.Float(), nullable=False),
        sa.Column("minimum_purchase", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_discount", sa.Integer(), nullable=True),
        sa.Column("display_type", sa.String(16), nullable=False, server_default="hidden"),
        sa.Column("banner_image", sa.String(1024), nullable=True),
        sa.Column("banner_text", sa.String(255), nullable=True),
        sa.Column("auto_apply_priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("usage_limit", sa.Integer(), nullable=True),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("user_limit", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("valid_from", sa.DateTime(), nullable=False),
        sa.Column("valid_until", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("applicable_category_ids", sa.JSON(), nullable=False),
        sa.Column("excluded_product_ids", sa.JSON(), nullable=False),
        sa.Column("first_time_only", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_coupons_code", "coupons", ["code"], unique=True)

    # Create coupon_usages table
    op.create_table(
        "coupon_usages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("coupon_id", sa.Integer(), sa.ForeignKey("coupons.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("used_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_coupon_usages_coupon_id", "coupon_usages", ["coupon_id"])
    op.create_index("ix_coupon_usages_user_id", "coupon_usages", ["user_id"])

    # Create reviews table
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("comment", sa.String(1000), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("helpful_user_ids", sa.JSON(), nullable=False),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("product_id", "user_id", name="uq_reviews_product_user"),
    )
    op.create_index("ix_reviews_product_id", "reviews", ["product_id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])

    # Create reward_transactions table
    op.create_table(
        "reward_transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("balance", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=True),
        sa.Column("admin_user_id", sa.Integer(), nullable=True),
        sa.Column("order_amount", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reward_transactions_user_id", "reward_transactions", ["user_id"])

    # Create settings table
    settings_table = op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("value", sa.JSON(), nullable=True),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("category", sa.String(32), nullable=False, server_default="general"),
        sa.Column("updated_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_settings_key", "settings", ["key"], unique=True)

    # Seed default incentive tiers and the reviews switch
    now = datetime.utcnow()
    default_settings = [
        {
            "key": "quantity_discounts",
            "value": {
                "enabled": True,
                "tiers": [
                    {"min_quantity": 3, "discount": 10, "label": "10% off on 3+ items"},
                    {"min_quantity": 5, "discount": 15, "label": "15% off on 5+ items"},
                    {"min_quantity": 8, "discount": 20, "label": "20% off on 8+ items"},
                ],
            },
            "description": "Quantity based discount tiers",
            "category": "aov",
        },
        {
            "key": "free_shipping",
            "value": {
                "enabled": True,
                "threshold": 999,
                "close_range": 200,
                "progress_messages": {
                    "far": "Add ₹{amount} more for FREE shipping!",
                    "close": "Only ₹{amount} away from FREE shipping!",
                    "achieved": "Congratulations! You qualify for FREE shipping!",
                },
            },
            "description": "Free shipping threshold",
            "category": "aov",
        },
        {
            "key": "loyalty_multipliers",
            "value": {
                "enabled": True,
                "rupees_per_point": 10,
                "multipliers": [
                    {"min_amount": 3000, "multiplier": 2, "label": "2X points on orders ₹3000+"},
                    {"min_amount": 5000, "multiplier": 3, "label": "3X points on orders ₹5000+"},
                ],
            },
            "description": "Reward point multipliers for large orders",
            "category": "aov",
        },
        {
            "key": "reviews_enabled",
            "value": True,
            "description": "Allow customers to write reviews",
            "category": "reviews",
        },
    ]
    op.bulk_insert(settings_table, [{**row, "created_at": now, "updated_at": now} for row in default_settings])


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("settings")
    op.drop_table("reward_transactions")
    op.drop_table("reviews")
    op.drop_table("coupon_usages")
    op.drop_table("coupons")
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("wishlist_items")
    op.drop_table("cart_items")
    op.drop_table("designs")
    op.drop_table("products")
    op.drop_table("categories")
    op.drop_table("users")
