"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request timing), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teestore.core.database.session import init_db
from teestore.core.logging_config import get_logger, setup_logging
from teestore.core.monitoring import initialize_logfire
from teestore.payments.razorpay import close_razorpay_client

from .api.v1 import (
    auth,
    cart,
    categories,
    checkout,
    coupons,
    designs,
    health,
    incentives,
    orders,
    payments,
    products,
    reviews,
    rewards,
    settings as store_settings,
    users,
    wishlist,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates tables when auto-create is enabled and releases the payment
    gateway client on shutdown.
    """
    # Startup
    try:
        logger.info("Starting up Teestore Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Teestore Server...")
    await close_razorpay_client()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Teestore Server API

    Storefront backend for a custom t-shirt shop: catalog, designs, carts,
    coupon and incentive pricing, Razorpay checkout, orders, reviews,
    wishlists and reward points.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users", tags=["users"])
app.include_router(categories.router, prefix=f"{constant.API_V1_STR}/categories", tags=["categories"])
app.include_router(products.router, prefix=f"{constant.API_V1_STR}/products", tags=["products"])
app.include_router(designs.router, prefix=f"{constant.API_V1_STR}/designs", tags=["designs"])
app.include_router(cart.router, prefix=f"{constant.API_V1_STR}/cart", tags=["cart"])
app.include_router(wishlist.router, prefix=f"{constant.API_V1_STR}/wishlist", tags=["wishlist"])
app.include_router(incentives.router, prefix=f"{constant.API_V1_STR}/incentives", tags=["incentives"])
app.include_router(checkout.router, prefix=f"{constant.API_V1_STR}/checkout", tags=["checkout"])
app.include_router(payments.router, prefix=f"{constant.API_V1_STR}/payments/razorpay", tags=["payments"])
app.include_router(orders.router, prefix=f"{constant.API_V1_STR}/orders", tags=["orders"])
app.include_router(coupons.router, prefix=f"{constant.API_V1_STR}/coupons", tags=["coupons"])
app.include_router(reviews.router, prefix=f"{constant.API_V1_STR}/reviews", tags=["reviews"])
app.include_router(rewards.router, prefix=f"{constant.API_V1_STR}/rewards", tags=["rewards"])
app.include_router(store_settings.router, prefix=f"{constant.API_V1_STR}/settings", tags=["settings"])
