"""
Product Endpoints.

Catalogue listing and detail pages, similar product recommendations, price
breakdowns, admin product management and inventory reports.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Query, status

from teestore.core.database.repositories.base import QueryBuilder
from teestore.core.database.repositories.products import ProductFilters
from teestore.core.models.domain.enums import Size
from teestore.core.models.io.common import Pagination
from teestore.core.models.io.products import (
    ImageAdd,
    InventoryCheck,
    InventoryReport,
    LowStockEntry,
    ProductCreate,
    ProductPage,
    ProductPricing,
    ProductRead,
    ProductUpdate,
    StockUpdate,
)
from teestore.server.services.catalog import CatalogService
from teestore.server.services.deps import AdminUser, ReposDep
from teestore.server.services.inventory import InventoryService

router = APIRouter()

ProductSort = Literal["newest", "price_asc", "price_desc", "popular", "rating"]


@router.get(
    "",
    response_model=ProductPage,
    summary="List Products",
    description="Active catalogue products with filters, sorting and pagination.",
    response_description="A page of products with pagination metadata.",
)
async def list_products(
    repos: ReposDep,
    category_id: Optional[int] = None,
    subcategory_id: Optional[int] = None,
    min_price: Optional[int] = Query(None, ge=0),
    max_price: Optional[int] = Query(None, ge=0),
    size: Optional[Size] = Query(None, description="Only products with stock in this size"),
    in_stock: Optional[bool] = None,
    search: Optional[str] = Query(None, description="Case-insensitive match on name, description and tags"),
    tag: Optional[str] = None,
    sort: ProductSort = "newest",
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> ProductPage:
    """
    List products.

    - **size**: keeps products that have units of this size in stock.
    - **sort**: newest (default), price_asc, price_desc, popular (most sold) or rating.
    """
    filters = ProductFilters(
        category_id=category_id,
        subcategory_id=subcategory_id,
        min_price=min_price,
        max_price=max_price,
        size=size.value if size else None,
        in_stock=in_stock,
        search=search,
        tag=tag,
    )
    products, total = await repos.products.search(
        filters, sort=sort, limit=limit, offset=QueryBuilder.page_offset(page, limit)
    )
    return ProductPage(
        products=[ProductRead.from_entity(product) for product in products],
        pagination=Pagination.build(page, limit, total),
    )


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    description="Add a product. Total stock and discount fields are derived.",
    responses={400: {"description": "Subcategory not under category"}, 404: {"description": "Category not found"}},
)
async def create_product(data: ProductCreate, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).create_product(data))


@router.get(
    "/inventory/check",
    response_model=InventoryCheck,
    summary="Check Availability",
    description="Whether a product size can cover the requested quantity.",
    responses={404: {"description": "Product not found"}},
)
async def check_inventory(
    repos: ReposDep,
    product_id: int,
    size: Size,
    quantity: int = Query(1, ge=1),
) -> InventoryCheck:
    return await InventoryService(repos).check(product_id, size.value, quantity)


@router.get(
    "/inventory/low-stock",
    response_model=List[LowStockEntry],
    summary="Low Stock Report",
    description="Every product size at or below its product's low stock threshold.",
)
async def low_stock(admin: AdminUser, repos: ReposDep) -> List[LowStockEntry]:
    return await InventoryService(repos).low_stock()


@router.get(
    "/inventory/report",
    response_model=InventoryReport,
    summary="Inventory Report",
    description="Stock summary and per-product stock value (total stock × price).",
)
async def inventory_report(admin: AdminUser, repos: ReposDep) -> InventoryReport:
    return await InventoryService(repos).report()


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get Product",
    responses={404: {"description": "Product not found or deleted"}},
)
async def get_product(product_id: int, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).get_product(product_id))


@router.get(
    "/{product_id}/similar",
    response_model=List[ProductRead],
    summary="Similar Products",
    description="In-stock products from the same category, then subcategory, then best sellers.",
)
async def similar_products(product_id: int, repos: ReposDep, limit: int = Query(4, ge=1, le=20)) -> List[ProductRead]:
    products = await CatalogService(repos).similar_products(product_id, limit)
    return [ProductRead.from_entity(product) for product in products]


@router.get(
    "/{product_id}/pricing",
    response_model=ProductPricing,
    summary="Price Breakdown",
)
async def product_pricing(product_id: int, repos: ReposDep) -> ProductPricing:
    service = CatalogService(repos)
    return service.pricing(await service.get_product(product_id))


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    summary="Update Product",
    description="Partial update; unset fields stay unchanged.",
)
async def update_product(product_id: int, data: ProductUpdate, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).update_product(product_id, data))


@router.delete(
    "/{product_id}",
    response_model=ProductRead,
    summary="Delete Product",
    description="Soft delete: the product disappears from the catalogue but can be restored.",
)
async def delete_product(product_id: int, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).soft_delete_product(product_id, admin.id))


@router.post(
    "/{product_id}/restore",
    response_model=ProductRead,
    summary="Restore Product",
    responses={400: {"description": "Product is not deleted"}},
)
async def restore_product(product_id: int, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).restore_product(product_id))


@router.post(
    "/{product_id}/images",
    response_model=ProductRead,
    summary="Add Image",
)
async def add_image(product_id: int, image: ImageAdd, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).add_image(product_id, image))


@router.delete(
    "/{product_id}/images/{index}",
    response_model=ProductRead,
    summary="Remove Image",
    responses={404: {"description": "No image at this index"}},
)
async def remove_image(product_id: int, index: int, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await CatalogService(repos).remove_image(product_id, index))


@router.put(
    "/{product_id}/stock",
    response_model=ProductRead,
    summary="Set Stock",
    description="Set the stock level of one size.",
)
async def set_stock(product_id: int, data: StockUpdate, admin: AdminUser, repos: ReposDep) -> ProductRead:
    return ProductRead.from_entity(await InventoryService(repos).set_stock(product_id, data.size.value, data.quantity))
