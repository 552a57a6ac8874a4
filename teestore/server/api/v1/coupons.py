"""
Coupon Endpoints.

Shopper-facing validation and auto-apply lookups, and admin coupon
management.
"""

from typing import List, Optional

from fastapi import APIRouter, status

from teestore.core.models.io.common import Message
from teestore.core.models.io.coupons import (
    AutoApplyRequest,
    CouponCreate,
    CouponRead,
    CouponUpdate,
    CouponValidateRequest,
    CouponValidation,
    PublicCoupon,
)
from teestore.server.services.coupons import CouponService
from teestore.server.services.deps import AdminUser, OptionalUser, ReposDep

router = APIRouter()


@router.post(
    "/validate",
    response_model=CouponValidation,
    summary="Validate Coupon",
    description="Check a code against a subtotal and, when signed in, the caller's usage.",
    responses={400: {"description": "Coupon not usable"}, 404: {"description": "Unknown code"}},
)
async def validate_coupon(data: CouponValidateRequest, user: OptionalUser, repos: ReposDep) -> CouponValidation:
    service = CouponService(repos)
    coupon = await service.validate(data.code, data.subtotal, user.id if user else None)
    return CouponValidation(valid=True, coupon=service.describe(coupon, data.subtotal))


@router.get(
    "/active",
    response_model=List[PublicCoupon],
    summary="Promotional Coupons",
    description="Promotional coupons valid right now.",
)
async def active_coupons(repos: ReposDep) -> List[PublicCoupon]:
    return [PublicCoupon.model_validate(coupon) for coupon in await CouponService(repos).promotional()]


@router.post(
    "/auto-apply",
    response_model=Optional[CouponValidation],
    summary="Best Auto-Apply Coupon",
    description="Highest priority auto-apply coupon (then largest discount) the caller may use, or null.",
)
async def auto_apply(data: AutoApplyRequest, user: OptionalUser, repos: ReposDep) -> Optional[CouponValidation]:
    service = CouponService(repos)
    coupon = await service.best_auto_apply(data.subtotal, user.id if user else None)
    if coupon is None:
        return None
    return CouponValidation(valid=True, coupon=service.describe(coupon, data.subtotal))


@router.post(
    "",
    response_model=CouponRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Coupon",
    responses={409: {"description": "Code already exists"}},
)
async def create_coupon(data: CouponCreate, admin: AdminUser, repos: ReposDep) -> CouponRead:
    return CouponRead.model_validate(await CouponService(repos).create(data))


@router.get("", response_model=List[CouponRead], summary="List Coupons")
async def list_coupons(admin: AdminUser, repos: ReposDep) -> List[CouponRead]:
    return [CouponRead.model_validate(coupon) for coupon in await repos.coupons.list()]


@router.get("/{coupon_id}", response_model=CouponRead, summary="Get Coupon")
async def get_coupon(coupon_id: int, admin: AdminUser, repos: ReposDep) -> CouponRead:
    return CouponRead.model_validate(await CouponService(repos).get(coupon_id))


@router.put("/{coupon_id}", response_model=CouponRead, summary="Update Coupon")
async def update_coupon(coupon_id: int, data: CouponUpdate, admin: AdminUser, repos: ReposDep) -> CouponRead:
    return CouponRead.model_validate(await CouponService(repos).update(coupon_id, data))


@router.delete("/{coupon_id}", response_model=Message, summary="Delete Coupon")
async def delete_coupon(coupon_id: int, admin: AdminUser, repos: ReposDep) -> Message:
    await CouponService(repos).delete(coupon_id)
    return Message(message="Coupon deleted")
