"""
Design catalogue service.
"""

from __future__ import annotations

import re
from typing import Optional

from teestore.core.database.entities.designs import Design
from teestore.core.database.repositories.bundle import RepoBundle
from teestore.core.errors import NotFoundError
from teestore.core.logging_config import get_logger
from teestore.core.models.io.designs import DesignCreate, DesignUpdate

logger = get_logger(__name__)


def slugify_design(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.strip().lower())
    return slug.strip("-") or "design"


class DesignService:
    """Design CRUD with unique slugs and derived aspect ratio."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def unique_slug(self, name: str, ignore_id: Optional[int] = None) -> str:
        """Slug for ``name``; taken slugs get ``-2``, ``-3`` and so on."""
        base = slugify_design(name)
        slug = base
        suffix = 2
        while True:
            existing = await self.repos.designs.get_by_slug(slug)
            if existing is None or existing.id == ignore_id:
                return slug
            slug = f"{base}-{suffix}"
            suffix += 1

    async def get(self, design_id: int) -> Design:
        design = await self.repos.designs.get_by_id(design_id)
        if design is None:
            raise NotFoundError("Design", design_id)
        return design

    async def view(self, design_id: int) -> Design:
        """Fetch a design for display and count the view."""
        design = await self.get(design_id)
        await self.repos.designs.increment_views(design.id)
        await self.repos.session.commit()
        return await self.repos.session.get(Design, design.id, populate_existing=True)

    async def create(self, data: DesignCreate) -> Design:
        design = Design(
            **data.model_dump(exclude={"placements"}),
            placements=[placement.value for placement in data.placements],
            slug=await self.unique_slug(data.name),
        )
        design.refresh_aspect_ratio()
        design = await self.repos.designs.create(design)
        logger.info(f"Design created: {design.slug}")
        return design

    async def update(self, design_id: int, data: DesignUpdate) -> Design:
        design = await self.get(design_id)
        update = data.model_dump(exclude_unset=True, exclude={"placements"})
        if data.placements is not None:
            design.placements = [placement.value for placement in data.placements]
        if update.get("name") and update["name"] != design.name:
            design.slug = await self.unique_slug(update["name"], ignore_id=design.id)
        for key, value in update.items():
            setattr(design, key, value)
        design.refresh_aspect_ratio()
        return await self.repos.designs.update(design)

    async def delete(self, design_id: int) -> None:
        if not await self.repos.designs.delete(design_id):
            raise NotFoundError("Design", design_id)

    async def like(self, design_id: int, like: bool) -> Design:
        design = await self.get(design_id)
        await self.repos.designs.change_likes(design.id, 1 if like else -1)
        await self.repos.session.commit()
        return await self.repos.session.get(Design, design.id, populate_existing=True)
