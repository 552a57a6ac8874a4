"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of storefront operations, including:
- API endpoint tracing
- Database operation monitoring
- Payment gateway calls
- Business events (orders placed, payments verified, low stock)
- Error tracking

All ``log_*`` helpers are no-ops until :func:`initialize_logfire` has
configured Logfire successfully, so they are safe to call from any code path.
"""

import logging
import os
from typing import Any, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "teestore")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "teestore-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

# Sampling configuration
LOGFIRE_SAMPLE_RATE = float(os.getenv("LOGFIRE_SAMPLE_RATE", "1.0"))

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_configured = False


def is_enabled() -> bool:
    """Whether Logfire has been configured for this process."""
    return _configured


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    This function sets up Logfire with automatic instrumentation for:
    - SQLAlchemy database operations
    - HTTPX HTTP requests (payment gateway)
    - FastAPI endpoints

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).

    The initialization is conditional based on LOGFIRE_ENABLED environment variable.
    """
    global _configured

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    logfire.configure(
        token=LOGFIRE_TOKEN,
        service_name=LOGFIRE_SERVICE_NAME,
        service_version=LOGFIRE_SERVICE_VERSION,
        environment=LOGFIRE_ENVIRONMENT,
        sampling=logfire.SamplingOptions(head=LOGFIRE_SAMPLE_RATE),
    )
    _configured = True

    if LOGFIRE_TRACE_SQLALCHEMY:
        logfire.instrument_sqlalchemy()
        logger.info("Logfire: SQLAlchemy instrumentation enabled")

    if LOGFIRE_TRACE_HTTPX:
        logfire.instrument_httpx()
        logger.info("Logfire: HTTPX instrumentation enabled")

    if LOGFIRE_TRACE_FASTAPI:
        if app is not None:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        else:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    logger.info(
        f"Logfire monitoring initialized: "
        f"project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, "
        f"service={LOGFIRE_SERVICE_NAME}"
    )


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _configured:
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_order_placed(order_id: int, user_id: int, amount: int, item_count: int, payment_method: str) -> None:
    """
    Log a successfully placed order.

    Args:
        order_id: The new order's identifier
        user_id: The purchasing user
        amount: Final amount charged in rupees
        item_count: Number of units ordered
        payment_method: ``razorpay`` or ``cod``
    """
    if not _configured:
        return
    logfire.info(
        "Order placed",
        order_id=order_id,
        user_id=user_id,
        amount=amount,
        item_count=item_count,
        payment_method=payment_method,
    )


def log_payment_verified(gateway_order_id: str, payment_id: str, verified: bool) -> None:
    """Log the outcome of a payment signature verification."""
    if not _configured:
        return
    logfire.info(
        "Payment verification",
        gateway_order_id=gateway_order_id,
        payment_id=payment_id,
        verified=verified,
    )


def log_low_stock(product_id: int, product_name: str, size: str, stock: int) -> None:
    """Log a size whose stock dropped to the alert level."""
    if not _configured:
        return
    logfire.warn(
        "Low stock",
        product_id=product_id,
        product_name=product_name,
        size=size,
        stock=stock,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict[str, Any]] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _configured:
        return
    logfire.error(
        "{error_type}: {error_message}",
        error_type=error_type,
        error_message=error_message,
        **(context or {}),
    )
