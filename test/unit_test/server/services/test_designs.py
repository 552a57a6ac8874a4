import pytest

from teestore.core.errors import NotFoundError
from teestore.core.models.io.designs import DesignCreate, DesignUpdate
from teestore.server.services.designs import DesignService, slugify_design

pytestmark = pytest.mark.asyncio


@pytest.fixture
def designs(repos) -> DesignService:
    return DesignService(repos)


def _design(name: str = "Tiger Stripes", **fields) -> DesignCreate:
    return DesignCreate(name=name, image_url="https://cdn.example.com/tiger.png", **fields)


def test_slugify_design():
    assert slugify_design("Retro Sun / 1984!") == "retro-sun-1984"
    assert slugify_design("!!!") == "design"


class TestDesigns:
    """Test design CRUD and engagement counters."""

    async def test_create_with_aspect_ratio(self, designs):
        design = await designs.create(_design(width=1200, height=800, tags=[" Animals ", "bold"]))

        assert design.slug == "tiger-stripes"
        assert design.aspect_ratio == 1.5
        assert design.tags == ["animals", "bold"]
        assert design.placements == ["front"]

    async def test_slugs_stay_unique(self, designs):
        await designs.create(_design())
        second = await designs.create(_design())
        third = await designs.create(_design())

        assert second.slug == "tiger-stripes-2"
        assert third.slug == "tiger-stripes-3"

    async def test_rename_changes_slug(self, designs):
        design = await designs.create(_design())

        updated = await designs.update(design.id, DesignUpdate(name="Lion Mane", placements=["front", "back"]))

        assert updated.slug == "lion-mane"
        assert updated.placements == ["front", "back"]

    async def test_view_counts(self, designs):
        design = await designs.create(_design())

        await designs.view(design.id)
        viewed = await designs.view(design.id)

        assert viewed.views == 2

    async def test_likes_never_negative(self, designs):
        design = await designs.create(_design())

        liked = await designs.like(design.id, True)
        assert liked.likes == 1

        await designs.like(design.id, False)
        unliked = await designs.like(design.id, False)
        assert unliked.likes == 0

    async def test_delete(self, designs):
        design = await designs.create(_design())

        await designs.delete(design.id)

        with pytest.raises(NotFoundError):
            await designs.get(design.id)
        with pytest.raises(NotFoundError):
            await designs.delete(design.id)
