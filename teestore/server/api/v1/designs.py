"""
Design Endpoints.

Artwork offered in the design studio: browsing, popularity lists, likes and
admin management.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException, Query, status

from teestore.core.database.repositories.base import QueryBuilder
from teestore.core.models.io.common import Message, Pagination
from teestore.core.models.io.designs import DesignCreate, DesignPage, DesignRead, DesignUpdate, LikeRequest
from teestore.server.services.deps import AdminUser, ReposDep
from teestore.server.services.designs import DesignService

router = APIRouter()

DesignSort = Literal["newest", "popular", "likes", "name"]


async def _page(repos, page: int, limit: int, **criteria) -> DesignPage:
    designs, total = await repos.designs.search(limit=limit, offset=QueryBuilder.page_offset(page, limit), **criteria)
    return DesignPage(
        designs=[DesignRead.model_validate(design) for design in designs],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "",
    response_model=DesignPage,
    summary="List Designs",
    description="Active designs with filters, sorting and pagination.",
)
async def list_designs(
    repos: ReposDep,
    category_id: Optional[int] = None,
    tag: Optional[str] = None,
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    sort: DesignSort = "newest",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> DesignPage:
    return await _page(
        repos, page, limit, category_id=category_id, tag=tag, featured=featured, search=search, sort=sort
    )


@router.post(
    "",
    response_model=DesignRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Design",
    description="Upload design metadata. The slug and aspect ratio are derived.",
)
async def create_design(data: DesignCreate, admin: AdminUser, repos: ReposDep) -> DesignRead:
    return DesignRead.model_validate(await DesignService(repos).create(data))


@router.get("/popular", response_model=List[DesignRead], summary="Popular Designs")
async def popular_designs(repos: ReposDep, limit: int = Query(10, ge=1, le=50)) -> List[DesignRead]:
    return [DesignRead.model_validate(design) for design in await repos.designs.popular(limit)]


@router.get("/featured", response_model=List[DesignRead], summary="Featured Designs")
async def featured_designs(repos: ReposDep, limit: int = Query(10, ge=1, le=50)) -> List[DesignRead]:
    return [DesignRead.model_validate(design) for design in await repos.designs.featured(limit)]


@router.get(
    "/random",
    response_model=DesignRead,
    summary="Random Design",
    responses={404: {"description": "No active design"}},
)
async def random_design(repos: ReposDep) -> DesignRead:
    design = await repos.designs.random()
    if design is None:
        raise HTTPException(status_code=404, detail="No designs available")
    return DesignRead.model_validate(design)


@router.get("/tags", response_model=List[str], summary="All Design Tags")
async def design_tags(repos: ReposDep) -> List[str]:
    return await repos.designs.all_tags()


@router.get("/category/{category_id}", response_model=DesignPage, summary="Designs by Category")
async def designs_by_category(
    category_id: int,
    repos: ReposDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> DesignPage:
    return await _page(repos, page, limit, category_id=category_id)


@router.get("/tag/{tag}", response_model=DesignPage, summary="Designs by Tag")
async def designs_by_tag(
    tag: str,
    repos: ReposDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> DesignPage:
    return await _page(repos, page, limit, tag=tag)


@router.get(
    "/{design_id}",
    response_model=DesignRead,
    summary="Get Design",
    description="Fetch a design and count the view.",
    responses={404: {"description": "Design not found"}},
)
async def get_design(design_id: int, repos: ReposDep) -> DesignRead:
    return DesignRead.model_validate(await DesignService(repos).view(design_id))


@router.post(
    "/{design_id}/like",
    response_model=DesignRead,
    summary="Like or Unlike",
    description="Add or remove a like; the counter never goes below zero.",
)
async def like_design(design_id: int, data: LikeRequest, repos: ReposDep) -> DesignRead:
    return DesignRead.model_validate(await DesignService(repos).like(design_id, data.like))


@router.put("/{design_id}", response_model=DesignRead, summary="Update Design")
async def update_design(design_id: int, data: DesignUpdate, admin: AdminUser, repos: ReposDep) -> DesignRead:
    return DesignRead.model_validate(await DesignService(repos).update(design_id, data))


@router.delete("/{design_id}", response_model=Message, summary="Delete Design")
async def delete_design(design_id: int, admin: AdminUser, repos: ReposDep) -> Message:
    await DesignService(repos).delete(design_id)
    return Message(message="Design deleted")
