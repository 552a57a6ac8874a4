"""
Reward Points Endpoints.
"""

from typing import List

from fastapi import APIRouter, Query

from teestore.core.models.io.rewards import RewardAdjust, RewardBalance, RewardTransactionRead
from teestore.server.services.deps import AdminUser, CurrentUser, PricingDep, ReposDep
from teestore.server.services.rewards import RewardService

router = APIRouter()


@router.get(
    "/balance",
    response_model=RewardBalance,
    summary="Points Balance",
    description="Current points, their rupee value and the per-order redemption cap.",
)
async def balance(user: CurrentUser, repos: ReposDep, pricing: PricingDep) -> RewardBalance:
    return RewardService(repos, pricing).balance(user)


@router.get("/history", response_model=List[RewardTransactionRead], summary="Points History")
async def history(
    user: CurrentUser,
    repos: ReposDep,
    pricing: PricingDep,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> List[RewardTransactionRead]:
    transactions = await RewardService(repos, pricing).history(user.id, limit=limit, offset=offset)
    return [RewardTransactionRead.model_validate(transaction) for transaction in transactions]


@router.post(
    "/users/{user_id}/adjust",
    response_model=RewardTransactionRead,
    summary="Adjust Points",
    description="Add or remove points by hand. The balance can never go negative.",
    responses={400: {"description": "Balance would go negative"}, 404: {"description": "User not found"}},
)
async def adjust(
    user_id: int, data: RewardAdjust, admin: AdminUser, repos: ReposDep, pricing: PricingDep
) -> RewardTransactionRead:
    transaction = await RewardService(repos, pricing).adjust(user_id, data.points, data.reason, admin.id)
    return RewardTransactionRead.model_validate(transaction)
