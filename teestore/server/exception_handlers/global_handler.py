"""
Exception Handlers for the FastAPI Application.

Domain errors raised by services are rendered with the status code they
carry. Anything else is caught by the global handler, which logs the full
request context with an error ID and answers 500.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from teestore.core.errors import StoreError
from teestore.core.logging_config import get_logger
from teestore.core.monitoring import log_error

logger = get_logger(__name__)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """
    Render a domain error.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error that was raised

    Returns:
        JSONResponse with the error message and type
    """
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
        log_error(type(exc).__name__, exc.message, {"path": request.url.path})
    else:
        logger.info(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "error_type": type(exc).__name__,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    # Generate unique error ID for tracking
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
