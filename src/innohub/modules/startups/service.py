"""
Startups Service

Business logic for the startup directory:

- Public directory of Approved startups, featured first
- Owner create, update and submit
- Reviewer decisions (any target status, optional message) and featuring

Reviewer decisions are deliberately not checked against a fixed status
graph; reviewers choose the target status.
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.auth import Actor
from innohub.core.database import get_db
from innohub.core.exceptions import DuplicateSlugError, NotFoundError
from innohub.modules.startups.models import Startup
from innohub.modules.startups.schemas import StartupCreate, StartupUpdate
from innohub.modules.workflow.authorization import Action, ensure_authorized, ensure_readable
from innohub.modules.workflow.engine import TransitionPayload, Trigger, transition
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.listing import PageMeta, Pagination, list_submissions
from innohub.modules.workflow.notifications import notify_owner
from innohub.modules.workflow.repository import SubmissionRepository, update_changes
from innohub.modules.workflow.slug import require_slug
from innohub.modules.workflow.statuses import StartupStatus

logger = logging.getLogger(__name__)

KIND = Kind.STARTUP

StartupRepository = SubmissionRepository[Startup]


def get_repository(db: AsyncSession = Depends(get_db)) -> StartupRepository:
    """FastAPI dependency providing the request's startup repository."""
    return SubmissionRepository(db, Startup, "Startup")


def build_filters(
    tag: str | None = None,
    stage: str | None = None,
    country: str | None = None,
    industry: str | None = None,
) -> list[ColumnElement[bool]]:
    """Predicates for the directory filters. ``tag`` must be one of the startup's tags."""
    filters: list[ColumnElement[bool]] = []
    if tag:
        filters.append(Startup.tags.contains([tag]))
    if stage:
        filters.append(Startup.stage == stage)
    if country:
        filters.append(Startup.country == country)
    if industry:
        filters.append(Startup.industry == industry)
    return filters


PUBLIC_ORDER = [Startup.featured.desc(), Startup.created_at.desc()]
ADMIN_ORDER = [Startup.status.asc(), Startup.created_at.asc()]


def _clean_tags(tags: list[str]) -> list[str]:
    return list(dict.fromkeys(tag.strip() for tag in tags if tag.strip()))


async def _get_startup(repo: StartupRepository, startup_id: int) -> Startup:
    startup = await repo.get_by_id(startup_id)
    if startup is None:
        raise NotFoundError("Startup", startup_id)
    return startup


async def _ensure_slug_available(
    repo: StartupRepository, slug: str, exclude_id: int | None = None
) -> None:
    if await repo.slug_exists(slug, exclude_id=exclude_id):
        logger.info(f"Duplicate startup slug rejected: {slug}")
        raise DuplicateSlugError("Startup", slug)


async def list_directory(
    repo: StartupRepository,
    pagination: Pagination,
    tag: str | None = None,
    stage: str | None = None,
    country: str | None = None,
    industry: str | None = None,
) -> tuple[list[Startup], PageMeta]:
    """List Approved startups for the public directory."""
    return await list_submissions(
        repo,
        KIND,
        build_filters(tag, stage, country, industry),
        pagination,
        PUBLIC_ORDER,
    )


async def get_startup_by_slug(repo: StartupRepository, slug: str, actor: Actor | None) -> Startup:
    """Get a startup by slug. Unapproved startups are visible to owner and reviewers only."""
    startup = await repo.get_by_slug(slug)
    ensure_readable(actor, startup, KIND, slug)
    return startup


async def create_startup(repo: StartupRepository, actor: Actor, data: StartupCreate) -> Startup:
    """
    Create a Draft startup owned by ``actor``. The slug is derived from the name.

    Raises:
        ValidationError: If the name yields an empty slug
        DuplicateSlugError: If another startup already has the name's slug
    """
    slug = require_slug(data.name, field="name")
    await _ensure_slug_available(repo, slug)

    startup = Startup(
        slug=slug,
        name=data.name,
        tagline=data.tagline,
        description=data.description,
        website=data.website,
        industry=data.industry,
        stage=data.stage,
        country=data.country,
        tags=_clean_tags(data.tags),
        featured=False,
        status=StartupStatus.DRAFT.value,
        owner_id=actor.id,
    )
    startup = await repo.create(startup)

    logger.info(f"User {actor.id} created startup {startup.id} ({startup.slug})")
    return startup


async def update_startup(
    repo: StartupRepository,
    startup_id: int,
    actor: Actor,
    data: StartupUpdate,
) -> Startup:
    """Update a startup's fields. A name change regenerates the slug."""
    startup = await _get_startup(repo, startup_id)
    ensure_authorized(actor, startup, Action.UPDATE, KIND)

    changes: dict[str, Any] = update_changes(Startup, data)
    if data.tags is not None:
        changes["tags"] = _clean_tags(data.tags)

    if data.name is not None and data.name != startup.name:
        slug = require_slug(data.name, field="name")
        if slug != startup.slug:
            await _ensure_slug_available(repo, slug, exclude_id=startup.id)
            changes["slug"] = slug

    startup = await repo.update(startup, changes)
    logger.info(f"User {actor.id} updated startup {startup.id}: {sorted(changes)}")
    return startup


async def submit_startup(repo: StartupRepository, startup_id: int, actor: Actor) -> Startup:
    """Submit a startup for review."""
    return await transition(repo, KIND, startup_id, Trigger.SUBMIT, actor)


async def list_startups_for_review(
    repo: StartupRepository,
    actor: Actor,
    pagination: Pagination,
    status: str | None = None,
) -> tuple[list[Startup], PageMeta]:
    """List startups in any status for reviewers."""
    return await list_submissions(
        repo,
        KIND,
        [],
        pagination,
        ADMIN_ORDER,
        status=status,
        actor=actor,
        admin_view=True,
    )


async def decide_startup(
    repo: StartupRepository,
    startup_id: int,
    actor: Actor,
    to: str,
    message: str | None = None,
) -> Startup:
    """
    Move a startup to the reviewer-chosen status ``to``.

    A message, if given, is stored as moderator notes and emailed to the owner.
    """
    startup = await transition(
        repo,
        KIND,
        startup_id,
        Trigger.ADVANCE,
        actor,
        TransitionPayload(notes=message, target_status=to),
    )
    logger.info(f"Reviewer {actor.id} moved startup {startup.id} to {startup.status}")

    await notify_owner(
        repo.db, KIND, startup, startup.name, f"/startups/{startup.slug}", notes=message
    )
    return startup


async def set_featured(
    repo: StartupRepository,
    startup_id: int,
    actor: Actor,
    featured: bool,
) -> Startup:
    """Feature or unfeature a startup in the directory."""
    startup = await _get_startup(repo, startup_id)
    ensure_authorized(actor, startup, Action.MODERATE, KIND)

    startup = await repo.update(startup, {"featured": featured})
    logger.info(f"Reviewer {actor.id} set featured={featured} on startup {startup.id}")
    return startup
