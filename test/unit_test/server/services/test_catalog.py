"""
Unit tests for the catalogue service: the category hierarchy and product
lifecycle.
"""

import pytest

from teestore.core.database.entities.products import Product
from teestore.core.errors import BusinessRuleError, ConflictError, NotFoundError
from teestore.core.models.io.categories import CategoryCreate, CategoryUpdate
from teestore.core.models.io.products import ImageAdd, ProductCreate, ProductUpdate
from teestore.server.services.catalog import CatalogService, slugify_category

pytestmark = pytest.mark.asyncio


@pytest.fixture
def catalog(repos) -> CatalogService:
    return CatalogService(repos)


@pytest.mark.parametrize(
    "name,slug",
    [("Graphic Tees", "graphic-tees"), ("  Oversized & Boxy! ", "oversized-boxy"), ("Kids   Wear", "kids-wear")],
)
def test_slugify_category(name, slug):
    assert slugify_category(name) == slug


class TestCategories:
    """Test the two-level category hierarchy."""

    async def test_subcategory_level(self, catalog):
        parent = await catalog.create_category(CategoryCreate(name="Women"))
        child = await catalog.create_category(CategoryCreate(name="Crop Tops", parent_id=parent.id))

        assert parent.level == 0
        assert child.level == 1
        assert child.slug == "crop-tops"

    async def test_duplicate_name(self, catalog, category):
        with pytest.raises(ConflictError):
            await catalog.create_category(CategoryCreate(name=category.name))

    async def test_unknown_parent(self, catalog):
        with pytest.raises(NotFoundError):
            await catalog.create_category(CategoryCreate(name="Orphan", parent_id=404))

    async def test_cannot_be_own_parent(self, catalog, category):
        with pytest.raises(BusinessRuleError):
            await catalog.update_category(category.id, CategoryUpdate(parent_id=category.id))

    async def test_rename_regenerates_slug(self, catalog, category):
        updated = await catalog.update_category(category.id, CategoryUpdate(name="Men Classics"))

        assert updated.slug == "men-classics"

    async def test_delete_guards(self, catalog, category, product):
        with pytest.raises(BusinessRuleError, match="products"):
            await catalog.delete_category(category.id)

        parent = await catalog.create_category(CategoryCreate(name="Unisex"))
        await catalog.create_category(CategoryCreate(name="Hoodies", parent_id=parent.id))
        with pytest.raises(BusinessRuleError, match="subcategories"):
            await catalog.delete_category(parent.id)

    async def test_tree(self, catalog):
        women = await catalog.create_category(CategoryCreate(name="Women"))
        await catalog.create_category(CategoryCreate(name="Crop Tops", parent_id=women.id))
        await catalog.create_category(CategoryCreate(name="Basics", parent_id=women.id))
        await catalog.create_category(CategoryCreate(name="Archive", is_active=False))

        tree = await catalog.category_tree()

        assert [node.name for node in tree] == ["Women"]
        assert [child.name for child in tree[0].subcategories] == ["Basics", "Crop Tops"]

        hierarchy = await catalog.category_hierarchy(women.id)
        assert len(hierarchy.subcategories) == 2


class TestProducts:
    """Test product creation and lifecycle."""

    async def test_create_derives_stock_and_discount(self, catalog, category):
        product = await catalog.create_product(
            ProductCreate(
                name="Graphic Tee",
                price=600,
                mrp=800,
                category_id=category.id,
                stock={"M": 5, "L": 3},
                available_sizes=["M", "L"],
            )
        )

        assert product.total_stock == 8
        assert product.stock_m == 5
        assert product.discount == 200
        assert product.discount_percentage == 25

    async def test_subcategory_must_belong_to_category(self, catalog, category):
        other = await catalog.create_category(CategoryCreate(name="Women"))
        sub = await catalog.create_category(CategoryCreate(name="Crop Tops", parent_id=other.id))

        with pytest.raises(BusinessRuleError):
            await catalog.create_product(
                ProductCreate(name="Tee", price=500, category_id=category.id, subcategory_id=sub.id)
            )

    async def test_update_recomputes_derived_fields(self, catalog, product):
        updated = await catalog.update_product(product.id, ProductUpdate(stock={"S": 0}, mrp=1000))

        assert updated.total_stock == 40
        assert updated.discount_percentage == 50

    async def test_soft_delete_and_restore(self, catalog, admin, product):
        deleted = await catalog.soft_delete_product(product.id, admin.id)
        assert deleted.is_deleted
        assert deleted.deleted_by == admin.id

        with pytest.raises(NotFoundError):
            await catalog.get_product(product.id)

        restored = await catalog.restore_product(product.id)
        assert not restored.is_deleted
        assert restored.deleted_at is None

        with pytest.raises(BusinessRuleError):
            await catalog.restore_product(product.id)

    async def test_images_keep_one_primary(self, catalog, product):
        await catalog.add_image(product.id, ImageAdd(url="https://cdn.example.com/a.png"))
        await catalog.add_image(product.id, ImageAdd(url="https://cdn.example.com/b.png", is_primary=True))
        updated = await catalog.add_image(product.id, ImageAdd(url="https://cdn.example.com/c.png"))

        assert [image["is_primary"] for image in updated.images] == [False, True, False]

        updated = await catalog.remove_image(product.id, 1)
        assert [image["url"] for image in updated.images] == [
            "https://cdn.example.com/a.png",
            "https://cdn.example.com/c.png",
        ]
        assert updated.images[0]["is_primary"] is True
        assert [image["order"] for image in updated.images] == [0, 1]

        with pytest.raises(NotFoundError):
            await catalog.remove_image(product.id, 5)

    async def test_similar_products(self, catalog, make_product):
        product = await make_product(name="Base")
        same_category = await make_product(name="Sibling")
        await make_product(name="Sold Out", stock=0)

        similar = await catalog.similar_products(product.id)

        assert [p.id for p in similar] == [same_category.id]


class TestPricing:
    def test_gross_from_mrp(self):
        pricing = CatalogService.pricing(Product(name="Tee", price=600, mrp=800, category_id=1))

        assert pricing.gross_amount == 800
        assert pricing.savings == 200
        assert pricing.discount_percentage == 25

    def test_gross_without_mrp(self):
        pricing = CatalogService.pricing(Product(name="Tee", price=500, category_id=1))

        assert pricing.gross_amount == 750
        assert pricing.savings == 250
        assert pricing.discount_percentage == 33
