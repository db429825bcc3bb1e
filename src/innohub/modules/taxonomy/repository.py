"""
Taxonomy Repository

Connect-or-create lookups for tags and categories. New rows are flushed,
not committed, so they are persisted by the caller's record write.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.exceptions import NotFoundError
from innohub.modules.taxonomy.models import Category, Tag
from innohub.modules.workflow.slug import require_slug

logger = logging.getLogger(__name__)


def _clean_names(names: list[str]) -> list[str]:
    seen: dict[str, str] = {}
    for name in names:
        cleaned = name.strip()
        if cleaned and cleaned.lower() not in seen:
            seen[cleaned.lower()] = cleaned
    return list(seen.values())


async def get_or_create_tags(db: AsyncSession, names: list[str]) -> list[Tag]:
    """
    Resolve tag names to Tag rows, creating the missing ones.

    Names are matched by slug, so "Machine Learning" and "machine-learning"
    resolve to the same tag. Blank and repeated names are dropped.
    """
    wanted = {require_slug(name, field="tag"): name for name in _clean_names(names)}
    if not wanted:
        return []

    result = await db.execute(select(Tag).where(Tag.slug.in_(list(wanted))))
    existing = {tag.slug: tag for tag in result.scalars().all()}

    tags: list[Tag] = []
    for slug, name in wanted.items():
        tag = existing.get(slug)
        if tag is None:
            tag = Tag(name=name, slug=slug)
            db.add(tag)
            logger.info(f"Created tag: {slug}")
        tags.append(tag)

    await db.flush()
    return tags


async def get_category(db: AsyncSession, category_id: int) -> Category:
    """Get a category by ID, raising NotFoundError if it is missing."""
    category = await db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


async def get_or_create_category(db: AsyncSession, name: str) -> Category:
    """Resolve a category name to a Category row, creating it if missing."""
    slug = require_slug(name, field="category")

    result = await db.execute(select(Category).where(Category.slug == slug))
    category = result.scalar_one_or_none()
    if category is None:
        category = Category(name=name.strip(), slug=slug)
        db.add(category)
        await db.flush()
        logger.info(f"Created category: {slug}")

    return category


async def resolve_category(
    db: AsyncSession,
    category_id: int | None = None,
    category_name: str | None = None,
) -> Category | None:
    """Resolve a category by ID, or by name with connect-or-create."""
    if category_id is not None:
        return await get_category(db, category_id)
    if category_name:
        return await get_or_create_category(db, category_name)
    return None
