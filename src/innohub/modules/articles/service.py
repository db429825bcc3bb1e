"""
Articles Service

Business logic for editorial articles:

- Public listing of published articles, filtered by tag and category
- Article detail by slug and related articles
- Admin create, update, publish and delete
- Release of scheduled articles whose publish date has passed

Status changes go through the workflow engine; field edits that arrive
together with a status change are written in the same update.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import Depends
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.auth import SYSTEM_ACTOR, Actor
from innohub.core.database import get_db
from innohub.core.exceptions import DuplicateSlugError, NotFoundError
from innohub.modules.articles.models import Article
from innohub.modules.articles.schemas import ArticleCreate, ArticleUpdate
from innohub.modules.taxonomy import repository as taxonomy
from innohub.modules.taxonomy.models import Category, Tag
from innohub.modules.workflow.authorization import Action, ensure_authorized, ensure_readable
from innohub.modules.workflow.engine import (
    TransitionPayload,
    Trigger,
    apply_transition,
    transition,
)
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.listing import PageMeta, Pagination, list_submissions
from innohub.modules.workflow.repository import SubmissionRepository, update_changes
from innohub.modules.workflow.slug import require_slug
from innohub.modules.workflow.statuses import ArticleStatus

logger = logging.getLogger(__name__)

KIND = Kind.ARTICLE
RELATED_LIMIT = 3

ArticleRepository = SubmissionRepository[Article]

_STATUS_TRIGGERS = {
    ArticleStatus.PUBLISHED: Trigger.PUBLISH,
    ArticleStatus.SCHEDULED: Trigger.SCHEDULE,
    ArticleStatus.DRAFT: Trigger.UNPUBLISH,
}


def get_repository(db: AsyncSession = Depends(get_db)) -> ArticleRepository:
    """FastAPI dependency providing the request's article repository."""
    return SubmissionRepository(db, Article, "Article")


def _order_by() -> list[Any]:
    return [Article.published_at.desc().nulls_last()]


def build_filters(
    tag: str | None = None,
    category: str | None = None,
) -> list[ColumnElement[bool]]:
    """Predicates for the article listing filters (tag and category slugs)."""
    filters: list[ColumnElement[bool]] = []
    if tag:
        filters.append(Article.tags.any(Tag.slug == tag))
    if category:
        filters.append(Article.category.has(Category.slug == category))
    return filters


def _published_before(now: datetime) -> ColumnElement[bool]:
    return Article.published_at <= now


# ============================================
# Public
# ============================================


async def list_published_articles(
    repo: ArticleRepository,
    pagination: Pagination,
    tag: str | None = None,
    category: str | None = None,
    now: datetime | None = None,
) -> tuple[list[Article], PageMeta]:
    """List published articles whose publish date has passed, newest first."""
    now = now or datetime.now(UTC)
    filters = [*build_filters(tag, category), _published_before(now)]
    return await list_submissions(repo, KIND, filters, pagination, _order_by())


async def get_article_by_slug(repo: ArticleRepository, slug: str, actor: Actor | None) -> Article:
    """
    Get an article by slug.

    Drafts and scheduled articles are only visible to their owner and admins;
    anyone else gets NotFoundError.
    """
    article = await repo.get_by_slug(slug)
    ensure_readable(actor, article, KIND, slug)
    return article


async def get_related_articles(
    repo: ArticleRepository,
    article_id: int,
    actor: Actor | None,
    now: datetime | None = None,
) -> list[Article]:
    """
    Up to three published articles sharing a tag with the given article,
    falling back to articles in the same category.
    """
    article = await repo.get_by_id(article_id)
    ensure_readable(actor, article, KIND, article_id)

    now = now or datetime.now(UTC)
    base = [
        Article.id != article.id,
        Article.status == ArticleStatus.PUBLISHED,
        _published_before(now),
    ]

    related: list[Article] = []
    tag_ids = [tag.id for tag in article.tags]
    if tag_ids:
        related = await repo.find(
            where=[*base, Article.tags.any(Tag.id.in_(tag_ids))],
            order_by=[*_order_by(), Article.id.asc()],
            limit=RELATED_LIMIT,
        )

    if not related and article.category_id is not None:
        related = await repo.find(
            where=[*base, Article.category_id == article.category_id],
            order_by=[*_order_by(), Article.id.asc()],
            limit=RELATED_LIMIT,
        )

    return related


# ============================================
# Admin
# ============================================


async def list_articles_for_admin(
    repo: ArticleRepository,
    actor: Actor,
    pagination: Pagination,
    status: ArticleStatus | None = None,
) -> tuple[list[Article], PageMeta]:
    """List articles in any status for the admin dashboard."""
    return await list_submissions(
        repo,
        KIND,
        [],
        pagination,
        _order_by(),
        status=status.value if status else None,
        actor=actor,
        admin_view=True,
    )


async def _ensure_slug_available(
    repo: ArticleRepository, slug: str, exclude_id: int | None = None
) -> None:
    if await repo.slug_exists(slug, exclude_id=exclude_id):
        logger.info(f"Duplicate article slug rejected: {slug}")
        raise DuplicateSlugError("Article", slug)


async def create_article(repo: ArticleRepository, actor: Actor, data: ArticleCreate) -> Article:
    """
    Create a DRAFT article owned by ``actor``.

    Raises:
        ValidationError: If the title yields an empty slug
        DuplicateSlugError: If another article already has the title's slug
        NotFoundError: If ``category_id`` does not exist
    """
    slug = require_slug(data.title)
    await _ensure_slug_available(repo, slug)

    category = await taxonomy.resolve_category(repo.db, data.category_id, data.category_name)
    tags = await taxonomy.get_or_create_tags(repo.db, data.tags)

    article = Article(
        slug=slug,
        title=data.title,
        content=data.content,
        summary=data.summary,
        meta_title=data.meta_title,
        meta_description=data.meta_description,
        featured_image=data.featured_image,
        status=ArticleStatus.DRAFT,
        owner_id=actor.id,
        category=category,
        tags=tags,
    )
    article = await repo.create(article)

    logger.info(f"User {actor.id} created article {article.id} ({article.slug})")
    return article


async def update_article(
    repo: ArticleRepository,
    article_id: int,
    actor: Actor,
    data: ArticleUpdate,
) -> Article:
    """
    Update an article's fields and, if ``status`` is given, its status.

    A title change regenerates the slug. Category and tags are resolved by
    name with connect-or-create.

    Raises:
        NotFoundError: If the article does not exist
        ForbiddenError: If the actor is not the owner or an admin
        DuplicateSlugError: If the new title's slug belongs to another article
    """
    article = await repo.get_by_id(article_id)
    if article is None:
        raise NotFoundError("Article", article_id)
    ensure_authorized(actor, article, Action.UPDATE, KIND)

    changes: dict[str, Any] = update_changes(
        Article,
        data,
        exclude={"status", "publish_at", "tags", "category_id", "category_name"},
    )

    if data.title is not None and data.title != article.title:
        slug = require_slug(data.title)
        if slug != article.slug:
            await _ensure_slug_available(repo, slug, exclude_id=article.id)
            changes["slug"] = slug

    if data.category_id is not None or data.category_name:
        changes["category"] = await taxonomy.resolve_category(
            repo.db, data.category_id, data.category_name
        )

    if data.tags is not None:
        changes["tags"] = await taxonomy.get_or_create_tags(repo.db, data.tags)

    if data.status is not None:
        return await apply_transition(
            repo,
            KIND,
            article,
            _STATUS_TRIGGERS[data.status],
            actor,
            TransitionPayload(publish_at=data.publish_at),
            extra_changes=changes,
        )

    article = await repo.update(article, changes)
    logger.info(f"User {actor.id} updated article {article.id}: {sorted(changes)}")
    return article


async def publish_article(repo: ArticleRepository, article_id: int, actor: Actor) -> Article:
    """Publish an article now, whatever its current status."""
    return await transition(repo, KIND, article_id, Trigger.PUBLISH, actor)


async def delete_article(repo: ArticleRepository, article_id: int, actor: Actor) -> None:
    """Hard-delete an article."""
    article = await repo.get_by_id(article_id)
    if article is None:
        raise NotFoundError("Article", article_id)
    ensure_authorized(actor, article, Action.DELETE, KIND)

    await repo.delete(article)
    logger.info(f"User {actor.id} deleted article {article_id}")


# ============================================
# Scheduled release
# ============================================


async def release_scheduled_articles(
    repo: ArticleRepository,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Publish SCHEDULED articles whose publish date has passed.

    Runs as the system actor. Released articles keep their scheduled
    ``published_at``. Failures are logged per article and do not stop the
    run; the job is idempotent because released articles leave SCHEDULED.

    Returns:
        Dict with released article ids and the number of errors
    """
    now = now or datetime.now(UTC)
    due = await repo.find(
        where=[Article.status == ArticleStatus.SCHEDULED, _published_before(now)],
        order_by=[Article.published_at.asc(), Article.id.asc()],
    )

    logger.info(f"Found {len(due)} scheduled articles due for release")

    results: dict[str, Any] = {"released": [], "total_errors": 0}
    for article in due:
        try:
            await apply_transition(repo, KIND, article, Trigger.RELEASE, SYSTEM_ACTOR)
            results["released"].append(article.id)
        except Exception as e:
            logger.error(f"Error releasing article {article.id}: {e}", exc_info=True)
            results["total_errors"] += 1

    return results
