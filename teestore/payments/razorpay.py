"""Razorpay payment gateway client

Overview
--------
Thin async HTTP client for the parts of the Razorpay REST API the storefront
uses: creating gateway orders before checkout and fetching payments after
the customer completes the checkout widget. Signature checks for checkout
callbacks and webhooks are local HMAC computations.

Mock mode
---------
When no key id/secret are configured the client never touches the network.
``create_order`` returns ``order_test_<ms>`` ids and ``fetch_payment``
returns a captured card payment, so the checkout flow can be exercised in
development. Signatures are then computed with the placeholder secret
``dummy_secret``.

Errors
------
Non-2xx responses and transport failures are raised as
``PaymentGatewayError`` carrying the gateway status code when available.

Usage
-----
>>> client = RazorpayClient(settings.razorpay)
>>> order = await client.create_order(amount_paise=49900, receipt="receipt_1")
>>> client.verify_payment_signature(order["id"], payment_id, signature)
"""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Any, Dict, Optional

import httpx

from teestore.core.errors import PaymentGatewayError
from teestore.core.logging_config import get_logger
from teestore.server.core.config import RazorpayConfig, settings

logger = get_logger(__name__)

MOCK_SECRET = "dummy_secret"
MOCK_KEY_ID = "rzp_test_dummy"


def _hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class RazorpayClient:
    """Async client for the Razorpay orders and payments API.

    Args:
        config: Gateway credentials and endpoint
        client: Optional preconfigured ``httpx.AsyncClient`` (tests inject a
            ``MockTransport`` here)
    """

    def __init__(self, config: RazorpayConfig, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self._client = client

    @property
    def mock_mode(self) -> bool:
        return not self.config.configured

    @property
    def key_id(self) -> str:
        return self.config.key_id or MOCK_KEY_ID

    @property
    def _secret(self) -> str:
        return self.config.key_secret or MOCK_SECRET

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                auth=(self.config.key_id or "", self.config.key_secret or ""),
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._http().request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Razorpay {operation} failed with {e.response.status_code}: {e.response.text}")
            raise PaymentGatewayError(operation, e.response.text, gateway_status=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Razorpay {operation} transport error: {e}")
            raise PaymentGatewayError(operation, str(e)) from e
        return response.json()

    async def create_order(
        self,
        amount_paise: int,
        receipt: str,
        currency: str = "INR",
        notes: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """Create a gateway order the checkout widget is opened with.

        API
        ---
        - Method/Path: ``POST /orders``

        Args:
            amount_paise: Amount to collect, in paise
            receipt: Merchant receipt reference
            currency: ISO currency code
            notes: Free-form key/value notes stored with the order

        Returns:
            ``{"id", "amount", "currency", "receipt"}``
        """
        if self.mock_mode:
            logger.info("Razorpay credentials missing, returning mock order")
            return {
                "id": f"order_test_{int(time.time() * 1000)}",
                "amount": amount_paise,
                "currency": currency,
                "receipt": receipt,
            }

        payload = {
            "amount": amount_paise,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
            "payment_capture": 1,
        }
        order = await self._request("create_order", "POST", "/orders", json=payload)
        return {
            "id": order["id"],
            "amount": order["amount"],
            "currency": order["currency"],
            "receipt": order.get("receipt", receipt),
        }

    async def fetch_order(self, order_id: str) -> Dict[str, Any]:
        """Fetch a gateway order, including the ``amount`` it was opened for (paise).

        API
        ---
        - Method/Path: ``GET /orders/{order_id}``

        Mock orders are not stored anywhere, so callers skip this in mock mode.
        """
        return await self._request("fetch_order", "GET", f"/orders/{order_id}")

    async def fetch_payment(self, payment_id: str, order_id: Optional[str] = None) -> Dict[str, Any]:
        """Fetch a payment.

        API
        ---
        - Method/Path: ``GET /payments/{payment_id}``
        """
        if self.mock_mode:
            return {
                "id": payment_id,
                "amount": 100000,
                "currency": "INR",
                "status": "captured",
                "method": "card",
                "order_id": order_id,
                "created_at": int(time.time()),
            }
        return await self._request("fetch_payment", "GET", f"/payments/{payment_id}")

    def payment_signature(self, order_id: str, payment_id: str) -> str:
        """Expected checkout signature for an order/payment pair."""
        return _hmac_sha256(self._secret, f"{order_id}|{payment_id}".encode("utf-8"))

    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        """Check the signature returned by the checkout widget."""
        if not (order_id and payment_id and signature):
            return False
        return hmac.compare_digest(self.payment_signature(order_id, payment_id), signature)

    def verify_webhook_signature(self, body: bytes, signature: Optional[str]) -> bool:
        """Check the ``X-Razorpay-Signature`` header of a webhook delivery.

        Deliveries are rejected when no webhook secret is configured.
        """
        if not signature or not self.config.webhook_secret:
            return False
        expected = _hmac_sha256(self.config.webhook_secret, body)
        return hmac.compare_digest(expected, signature)


_client: Optional[RazorpayClient] = None


def get_razorpay_client() -> RazorpayClient:
    """FastAPI dependency returning the process-wide gateway client."""
    global _client
    if _client is None:
        _client = RazorpayClient(settings.razorpay)
    return _client


async def close_razorpay_client() -> None:
    """Release the process-wide gateway client, if one was created."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
