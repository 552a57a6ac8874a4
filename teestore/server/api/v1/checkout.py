"""
Checkout Endpoints.

Price breakdown of a prospective order, computed exactly as order placement
will compute it.
"""

from fastapi import APIRouter

from teestore.core.models.io.incentives import CheckoutQuote
from teestore.core.models.io.orders import QuoteRequest
from teestore.server.services.checkout import CheckoutService
from teestore.server.services.deps import CurrentUser, GatewayDep, PricingDep, ReposDep

router = APIRouter()


@router.post(
    "/quote",
    response_model=CheckoutQuote,
    summary="Quote Order",
    description="""
    Price the cart (from_cart) or the given items: quantity discount, coupon,
    reward points, online payment discount and shipping, applied in that order.
    """,
    responses={
        400: {"description": "Empty order or unusable coupon"},
        404: {"description": "Unknown product, design or coupon"},
    },
)
async def quote(
    data: QuoteRequest, user: CurrentUser, repos: ReposDep, pricing: PricingDep, gateway: GatewayDep
) -> CheckoutQuote:
    return await CheckoutService(repos, pricing, gateway).quote(user, data)
