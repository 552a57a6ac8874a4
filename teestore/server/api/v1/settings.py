"""
Store Settings Endpoints.

Key/value store settings editable by admins, such as incentive tiers and
the reviews switch.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from teestore.core.models.io.store_settings import ReviewsStatus, SettingRead, SettingWrite
from teestore.server.services.deps import AdminUser, ReposDep
from teestore.server.services.incentives import REVIEWS_ENABLED_KEY, IncentiveService

router = APIRouter()


@router.get("/reviews-status", response_model=ReviewsStatus, summary="Reviews Enabled")
async def reviews_status(repos: ReposDep) -> ReviewsStatus:
    return ReviewsStatus(reviews_enabled=await IncentiveService(repos.settings).reviews_enabled())


@router.post(
    "/reviews-status/toggle",
    response_model=ReviewsStatus,
    summary="Toggle Reviews",
    description="Switch customer reviews on or off.",
)
async def toggle_reviews(admin: AdminUser, repos: ReposDep) -> ReviewsStatus:
    enabled = not await IncentiveService(repos.settings).reviews_enabled()
    await repos.settings.set_value(
        REVIEWS_ENABLED_KEY, enabled, description="Allow customers to write reviews", category="reviews",
        updated_by=admin.id,
    )
    return ReviewsStatus(reviews_enabled=enabled)


@router.get("", response_model=List[SettingRead], summary="List Settings")
async def list_settings(admin: AdminUser, repos: ReposDep) -> List[SettingRead]:
    return [SettingRead.model_validate(setting) for setting in await repos.settings.list_all()]


@router.get(
    "/{key}",
    response_model=SettingRead,
    summary="Get Setting",
    responses={404: {"description": "Setting not found"}},
)
async def get_setting(key: str, admin: AdminUser, repos: ReposDep) -> SettingRead:
    setting = await repos.settings.get_by_key(key)
    if setting is None:
        raise HTTPException(status_code=404, detail=f"Setting '{key}' not found")
    return SettingRead.model_validate(setting)


@router.put("/{key}", response_model=SettingRead, summary="Write Setting")
async def put_setting(key: str, data: SettingWrite, admin: AdminUser, repos: ReposDep) -> SettingRead:
    setting = await repos.settings.set_value(
        key, data.value, description=data.description, category=data.category, updated_by=admin.id
    )
    return SettingRead.model_validate(setting)
