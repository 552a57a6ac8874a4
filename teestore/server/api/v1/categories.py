"""
Category Endpoints.

Two-level category tree: main categories and their subcategories.
"""

from typing import List

from fastapi import APIRouter, status

from teestore.core.models.io.categories import CategoryCreate, CategoryRead, CategoryTreeNode, CategoryUpdate
from teestore.core.models.io.common import Message
from teestore.server.services.catalog import CatalogService
from teestore.server.services.deps import AdminUser, ReposDep

router = APIRouter()


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
    description="Create a main category, or a subcategory when parent_id is given. The slug is derived from the name.",
    responses={404: {"description": "Parent not found"}, 409: {"description": "Name or slug already exists"}},
)
async def create_category(data: CategoryCreate, admin: AdminUser, repos: ReposDep) -> CategoryRead:
    return CategoryRead.model_validate(await CatalogService(repos).create_category(data))


@router.get(
    "",
    response_model=List[CategoryRead],
    summary="List Categories",
    description="All categories, main and sub, active or not.",
)
async def list_categories(repos: ReposDep) -> List[CategoryRead]:
    return [CategoryRead.model_validate(category) for category in await repos.categories.list_all()]


@router.get(
    "/main",
    response_model=List[CategoryRead],
    summary="List Main Categories",
)
async def main_categories(repos: ReposDep) -> List[CategoryRead]:
    return [CategoryRead.model_validate(category) for category in await repos.categories.list_main()]


@router.get(
    "/tree",
    response_model=List[CategoryTreeNode],
    summary="Category Tree",
    description="Active main categories with their active subcategories nested.",
)
async def category_tree(repos: ReposDep) -> List[CategoryTreeNode]:
    return await CatalogService(repos).category_tree()


@router.get(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Get Category",
    responses={404: {"description": "Category not found"}},
)
async def get_category(category_id: int, repos: ReposDep) -> CategoryRead:
    return CategoryRead.model_validate(await CatalogService(repos).get_category(category_id))


@router.get(
    "/{category_id}/subcategories",
    response_model=List[CategoryRead],
    summary="List Subcategories",
)
async def subcategories(category_id: int, repos: ReposDep) -> List[CategoryRead]:
    return [CategoryRead.model_validate(category) for category in await repos.categories.list_children(category_id)]


@router.get(
    "/{category_id}/hierarchy",
    response_model=CategoryTreeNode,
    summary="Category Hierarchy",
    responses={404: {"description": "Category not found"}},
)
async def hierarchy(category_id: int, repos: ReposDep) -> CategoryTreeNode:
    return await CatalogService(repos).category_hierarchy(category_id)


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Update Category",
    description="Rename (re-slugging it) or move a category. A category cannot be its own parent.",
    responses={404: {"description": "Category not found"}, 409: {"description": "Name or slug already exists"}},
)
async def update_category(category_id: int, data: CategoryUpdate, admin: AdminUser, repos: ReposDep) -> CategoryRead:
    return CategoryRead.model_validate(await CatalogService(repos).update_category(category_id, data))


@router.delete(
    "/{category_id}",
    response_model=Message,
    summary="Delete Category",
    description="Delete a category that has no subcategories and no products.",
    responses={400: {"description": "Category still in use"}, 404: {"description": "Category not found"}},
)
async def delete_category(category_id: int, admin: AdminUser, repos: ReposDep) -> Message:
    await CatalogService(repos).delete_category(category_id)
    return Message(message="Category deleted")
