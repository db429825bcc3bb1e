"""
Projects Service

Business logic for the project showcase:

- Public directory of APPROVED and FEATURED projects
- Owner create, update, media and submit
- Flagging by any authenticated user
- Admin moderation: approve (optionally featured), reject, request changes

Owners may only edit while a project is PENDING or CHANGES_REQUESTED;
admins may edit in any status. Moderation decisions email the owner.
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.auth import Actor
from innohub.core.database import get_db
from innohub.core.exceptions import DuplicateSlugError, NotFoundError
from innohub.modules.projects import repository
from innohub.modules.projects.models import MediaType, Project, ProjectFlag, ProjectMedia
from innohub.modules.projects.schemas import FlagCreate, MediaCreate, ProjectCreate, ProjectUpdate
from innohub.modules.taxonomy import repository as taxonomy
from innohub.modules.taxonomy.models import Tag
from innohub.modules.workflow.authorization import Action, ensure_authorized, ensure_readable
from innohub.modules.workflow.engine import TransitionPayload, Trigger, transition
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.listing import PageMeta, Pagination, list_submissions
from innohub.modules.workflow.notifications import notify_owner
from innohub.modules.workflow.repository import SubmissionRepository, update_changes
from innohub.modules.workflow.slug import require_slug
from innohub.modules.workflow.statuses import ProjectStatus

logger = logging.getLogger(__name__)

KIND = Kind.PROJECT

ProjectRepository = SubmissionRepository[Project]


def get_repository(db: AsyncSession = Depends(get_db)) -> ProjectRepository:
    """FastAPI dependency providing the request's project repository."""
    return SubmissionRepository(db, Project, "Project")


def build_filters(
    tag: str | None = None,
    team: str | None = None,
    stack: str | None = None,
    country: str | None = None,
) -> list[ColumnElement[bool]]:
    """
    Predicates for the project listing filters.

    Args:
        tag: Tag slug the project must carry
        team: Case-insensitive substring of the team name
        stack: Technology the project's stack must contain
        country: Exact country
    """
    filters: list[ColumnElement[bool]] = []
    if tag:
        filters.append(Project.tags.any(Tag.slug == tag))
    if team:
        filters.append(Project.team_name.ilike(f"%{team}%"))
    if stack:
        filters.append(Project.stack.contains([stack]))
    if country:
        filters.append(Project.country == country)
    return filters


PUBLIC_ORDER = [Project.featured_at.desc().nulls_last(), Project.created_at.desc()]
ADMIN_ORDER = [Project.status.asc(), Project.submitted_at.asc().nulls_last()]


async def _get_project(repo: ProjectRepository, project_id: int) -> Project:
    project = await repo.get_by_id(project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return project


async def _ensure_slug_available(
    repo: ProjectRepository, slug: str, exclude_id: int | None = None
) -> None:
    if await repo.slug_exists(slug, exclude_id=exclude_id):
        logger.info(f"Duplicate project slug rejected: {slug}")
        raise DuplicateSlugError("Project", slug)


# ============================================
# Public
# ============================================


async def list_public_projects(
    repo: ProjectRepository,
    pagination: Pagination,
    status: str | None = None,
    tag: str | None = None,
    team: str | None = None,
    stack: str | None = None,
    country: str | None = None,
) -> tuple[list[Project], PageMeta]:
    """List APPROVED and FEATURED projects, featured first, newest next."""
    return await list_submissions(
        repo,
        KIND,
        build_filters(tag, team, stack, country),
        pagination,
        PUBLIC_ORDER,
        status=status,
    )


async def get_project_by_slug(repo: ProjectRepository, slug: str, actor: Actor | None) -> Project:
    """Get a project by slug. Non-public projects are only visible to owner and admins."""
    project = await repo.get_by_slug(slug)
    ensure_readable(actor, project, KIND, slug)
    return project


# ============================================
# Owner
# ============================================


async def create_project(repo: ProjectRepository, actor: Actor, data: ProjectCreate) -> Project:
    """
    Create a PENDING project owned by ``actor``.

    Raises:
        ValidationError: If the title yields an empty slug
        DuplicateSlugError: If another project already has the title's slug
    """
    slug = require_slug(data.title)
    await _ensure_slug_available(repo, slug)

    tags = await taxonomy.get_or_create_tags(repo.db, data.tags)

    project = Project(
        slug=slug,
        title=data.title,
        summary=data.summary,
        description=data.description,
        team_name=data.team_name,
        team_members=(
            [member.model_dump() for member in data.team_members] if data.team_members else None
        ),
        demo_link=data.demo_link,
        repo_link=data.repo_link,
        stack=data.stack,
        country=data.country,
        status=ProjectStatus.PENDING,
        owner_id=actor.id,
        tags=tags,
    )
    project = await repo.create(project)

    logger.info(f"User {actor.id} created project {project.id} ({project.slug})")
    return project


async def update_project(
    repo: ProjectRepository,
    project_id: int,
    actor: Actor,
    data: ProjectUpdate,
) -> Project:
    """
    Update a project's fields. A title change regenerates the slug.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the actor is not the owner or an admin, or the
            owner edits outside PENDING and CHANGES_REQUESTED
        DuplicateSlugError: If the new title's slug belongs to another project
    """
    project = await _get_project(repo, project_id)
    ensure_authorized(actor, project, Action.UPDATE, KIND)

    changes: dict[str, Any] = update_changes(Project, data, exclude={"tags"})

    if data.title is not None and data.title != project.title:
        slug = require_slug(data.title)
        if slug != project.slug:
            await _ensure_slug_available(repo, slug, exclude_id=project.id)
            changes["slug"] = slug

    if data.tags is not None:
        changes["tags"] = await taxonomy.get_or_create_tags(repo.db, data.tags)

    project = await repo.update(project, changes)
    logger.info(f"User {actor.id} updated project {project.id}: {sorted(changes)}")
    return project


async def add_project_media(
    repo: ProjectRepository,
    project_id: int,
    actor: Actor,
    data: MediaCreate,
) -> Project:
    """
    Attach an image or video URL to a project.

    The first image added to a project without a cover becomes its cover.
    """
    project = await _get_project(repo, project_id)
    ensure_authorized(actor, project, Action.ADD_MEDIA, KIND)

    media = ProjectMedia(url=data.url, type=data.type)
    changes: dict[str, Any] = {"media": [*project.media, media]}
    if data.type == MediaType.IMAGE and not project.cover_image:
        changes["cover_image"] = data.url

    project = await repo.update(project, changes)
    logger.info(f"User {actor.id} added {data.type.value} media to project {project.id}")
    return project


async def submit_project(repo: ProjectRepository, project_id: int, actor: Actor) -> Project:
    """Submit a PENDING or CHANGES_REQUESTED project for review."""
    return await transition(repo, KIND, project_id, Trigger.SUBMIT, actor)


async def flag_project(
    repo: ProjectRepository,
    project_id: int,
    actor: Actor,
    data: FlagCreate,
) -> ProjectFlag:
    """Record a flag raised by ``actor`` against a project they can see."""
    project = await repo.get_by_id(project_id)
    ensure_readable(actor, project, KIND, project_id)

    flag = await repository.create_flag(repo.db, project.id, actor.id, data.reason)
    logger.warning(f"User {actor.id} flagged project {project.id}: flag {flag.id}")
    return flag


# ============================================
# Admin
# ============================================


async def list_projects_for_admin(
    repo: ProjectRepository,
    actor: Actor,
    pagination: Pagination,
    status: ProjectStatus | None = None,
) -> tuple[list[Project], PageMeta]:
    """List projects in any status, grouped by status, oldest submission first."""
    return await list_submissions(
        repo,
        KIND,
        [],
        pagination,
        ADMIN_ORDER,
        status=status.value if status else None,
        actor=actor,
        admin_view=True,
    )


async def get_project_flags(
    repo: ProjectRepository, project_id: int, actor: Actor
) -> list[ProjectFlag]:
    """Get the unresolved flags raised against a project."""
    project = await _get_project(repo, project_id)
    ensure_authorized(actor, project, Action.MODERATE, KIND)
    return await repository.get_open_flags(repo.db, project.id)


async def _moderate(
    repo: ProjectRepository,
    project_id: int,
    actor: Actor,
    trigger: Trigger,
    notes: str | None = None,
) -> Project:
    project = await transition(
        repo, KIND, project_id, trigger, actor, TransitionPayload(notes=notes)
    )
    logger.info(f"Admin {actor.id} applied {trigger.value} to project {project.id}")

    await notify_owner(
        repo.db, KIND, project, project.title, f"/projects/{project.slug}", notes=notes
    )
    return project


async def approve_project(
    repo: ProjectRepository,
    project_id: int,
    actor: Actor,
    featured: bool = False,
) -> Project:
    """Approve a project, featuring it if ``featured`` is set."""
    trigger = Trigger.FEATURE if featured else Trigger.APPROVE
    return await _moderate(repo, project_id, actor, trigger)


async def reject_project(
    repo: ProjectRepository, project_id: int, actor: Actor, reason: str
) -> Project:
    """Reject a project, storing the reason as moderator notes."""
    return await _moderate(repo, project_id, actor, Trigger.REJECT, notes=reason)


async def request_project_changes(
    repo: ProjectRepository, project_id: int, actor: Actor, message: str
) -> Project:
    """Send a project back to its owner with the requested changes."""
    return await _moderate(repo, project_id, actor, Trigger.REQUEST_CHANGES, notes=message)
