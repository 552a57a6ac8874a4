"""
Razorpay Payment Endpoints.

Opens gateway orders for checkout, verifies the signature returned by the
checkout widget and receives gateway webhooks.
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Header, HTTPException, Request

from teestore.core.errors import PaymentVerificationError
from teestore.core.logging_config import get_logger
from teestore.core.models.domain.enums import PaymentStatus
from teestore.core.models.io.orders import PaymentConfirmation, QuoteRequest
from teestore.core.models.io.payments import PaymentOrderResponse, PaymentVerifyResponse, WebhookAck
from teestore.core.monitoring import log_payment_verified
from teestore.server.services.checkout import CheckoutService
from teestore.server.services.deps import CurrentUser, GatewayDep, PricingDep, ReposDep

logger = get_logger(__name__)
router = APIRouter()

WEBHOOK_PAYMENT_STATUS = {
    "payment.captured": PaymentStatus.paid,
    "payment.failed": PaymentStatus.failed,
}


def _payment_entity(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """``payload.payment.entity`` of a payment event, or None when the shape is wrong."""
    node: Any = event
    for key in ("payload", "payment", "entity"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


@router.post(
    "/order",
    response_model=PaymentOrderResponse,
    summary="Create Payment Order",
    description="Quote the order and open a Razorpay order for the final amount (in paise).",
    responses={502: {"description": "Gateway unavailable"}},
)
async def create_payment_order(
    data: QuoteRequest, user: CurrentUser, repos: ReposDep, pricing: PricingDep, gateway: GatewayDep
) -> PaymentOrderResponse:
    return await CheckoutService(repos, pricing, gateway).create_payment_order(user, data)


@router.post(
    "/verify",
    response_model=PaymentVerifyResponse,
    summary="Verify Payment",
    description="Check the checkout widget signature and return the payment.",
    responses={402: {"description": "Signature does not verify"}},
)
async def verify_payment(data: PaymentConfirmation, user: CurrentUser, gateway: GatewayDep) -> PaymentVerifyResponse:
    verified = gateway.verify_payment_signature(
        data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature
    )
    log_payment_verified(data.razorpay_order_id, data.razorpay_payment_id, verified)
    if not verified:
        raise PaymentVerificationError("Payment verification failed")
    payment = await gateway.fetch_payment(data.razorpay_payment_id, data.razorpay_order_id)
    return PaymentVerifyResponse(verified=True, payment=payment)


@router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Razorpay Webhook",
    description="Signed gateway notifications; captured and failed payments update the matching order.",
    responses={400: {"description": "Bad signature or payload"}},
)
async def webhook(
    request: Request,
    repos: ReposDep,
    gateway: GatewayDep,
    x_razorpay_signature: Optional[str] = Header(default=None),
) -> WebhookAck:
    body = await request.body()
    if not gateway.verify_webhook_signature(body, x_razorpay_signature):
        logger.warning("Rejected Razorpay webhook with an invalid signature")
        raise HTTPException(status_code=400, detail="Invalid webhook signature")

    try:
        event = json.loads(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid webhook payload") from e
    if not isinstance(event, dict):
        raise HTTPException(status_code=400, detail="Invalid webhook payload")

    name = event.get("event")
    if name is not None and not isinstance(name, str):
        raise HTTPException(status_code=400, detail="Invalid webhook payload")
    payment_status = WEBHOOK_PAYMENT_STATUS.get(name)
    if payment_status is None:
        logger.debug(f"Ignoring Razorpay webhook event {name}")
        return WebhookAck(status="ignored", event=name)

    entity = _payment_entity(event)
    if entity is None:
        raise HTTPException(status_code=400, detail="Invalid webhook payload")
    gateway_order_id = entity.get("order_id")
    order = await repos.orders.get_by_gateway_order_id(gateway_order_id) if gateway_order_id else None
    if order is None:
        logger.info(f"Razorpay webhook {name} for unknown gateway order {gateway_order_id}")
        return WebhookAck(status="ignored", event=name)

    order.payment_status = payment_status.value
    if entity.get("id"):
        order.transaction_id = entity["id"]
    await repos.orders.update(order)
    logger.info(f"Order {order.id} payment marked {payment_status.value} by webhook")
    return WebhookAck(status="ok", event=name)
