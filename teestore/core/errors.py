"""Error types for the storefront domain.

Defines a small hierarchy of exceptions raised by services to signal missing
resources, business rule violations, stock shortages and payment failures.
Each error carries the HTTP status the API layer renders it with.
"""

from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base error for all storefront exceptions."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    """Raised when a referenced resource does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: object = None) -> None:
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} '{identifier}' not found")
        self.resource = resource
        self.identifier = identifier


class ConflictError(StoreError):
    """Raised when an operation collides with existing state (duplicates)."""

    status_code = 409


class InsufficientStockError(ConflictError):
    """Raised when a size does not have enough units to fulfil an order line."""

    def __init__(self, product_name: str, size: str, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} size {size}: {available} available, {requested} requested"
        )
        self.product_name = product_name
        self.size = size
        self.available = available
        self.requested = requested


class BusinessRuleError(StoreError):
    """Raised when a request is well-formed but not allowed by store rules."""

    status_code = 400


class AuthenticationError(StoreError):
    """Raised when credentials or tokens are missing or invalid."""

    status_code = 401


class PermissionDeniedError(StoreError):
    """Raised when the caller is authenticated but not allowed to act."""

    status_code = 403


class PaymentVerificationError(StoreError):
    """Raised when a gateway payment signature does not verify."""

    status_code = 402


class PaymentGatewayError(StoreError):
    """Raised for unsuccessful calls to the payment gateway."""

    status_code = 502

    def __init__(self, operation: str, message: str, gateway_status: Optional[int] = None) -> None:
        super().__init__(f"Payment gateway call '{operation}' failed: {message}")
        self.operation = operation
        self.gateway_status = gateway_status
