"""
Internship Applications Service

Business logic for internship applications. Applications are never public;
the applicant and reviewers are the only readers.
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.auth import Actor
from innohub.core.database import get_db
from innohub.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from innohub.modules.internships.models import InternshipApplication
from innohub.modules.internships.schemas import ApplicationCreate, ApplicationUpdate
from innohub.modules.workflow.authorization import Action, ensure_authorized, ensure_readable
from innohub.modules.workflow.engine import TransitionPayload, Trigger, transition
from innohub.modules.workflow.kinds import Kind, policy_for
from innohub.modules.workflow.listing import PageMeta, Pagination, build_meta, list_submissions
from innohub.modules.workflow.repository import SubmissionRepository, update_changes
from innohub.modules.workflow.statuses import InternshipStatus

logger = logging.getLogger(__name__)

KIND = Kind.INTERNSHIP

ApplicationRepository = SubmissionRepository[InternshipApplication]

ADMIN_ORDER = [InternshipApplication.created_at.asc()]


def get_repository(db: AsyncSession = Depends(get_db)) -> ApplicationRepository:
    """FastAPI dependency providing the request's application repository."""
    return SubmissionRepository(db, InternshipApplication, "Internship application")


async def _get_application(repo: ApplicationRepository, application_id: int) -> InternshipApplication:
    application = await repo.get_by_id(application_id)
    if application is None:
        raise NotFoundError("Internship application", application_id)
    return application


async def list_my_applications(
    repo: ApplicationRepository, actor: Actor, pagination: Pagination
) -> tuple[list[InternshipApplication], PageMeta]:
    """List the caller's own applications, newest first, in any status."""
    where = [InternshipApplication.owner_id == actor.id]
    total = await repo.count(where)
    applications = await repo.find(
        where=where,
        order_by=[InternshipApplication.created_at.desc(), InternshipApplication.id.asc()],
        skip=pagination.skip,
        limit=pagination.limit,
    )
    return applications, build_meta(total, pagination)


async def create_application(
    repo: ApplicationRepository, actor: Actor, data: ApplicationCreate
) -> InternshipApplication:
    """Create a Draft application owned by ``actor``."""
    application = InternshipApplication(
        position=data.position,
        motivation=data.motivation,
        resume_url=data.resume_url,
        answers=data.answers,
        status=InternshipStatus.DRAFT.value,
        owner_id=actor.id,
    )
    application = await repo.create(application)

    logger.info(f"User {actor.id} created internship application {application.id}")
    return application


async def update_application(
    repo: ApplicationRepository,
    application_id: int,
    actor: Actor,
    data: ApplicationUpdate,
) -> InternshipApplication:
    application = await _get_application(repo, application_id)
    ensure_authorized(actor, application, Action.UPDATE, KIND)

    changes: dict[str, Any] = update_changes(InternshipApplication, data)
    return await repo.update(application, changes)


async def submit_application(
    repo: ApplicationRepository, application_id: int, actor: Actor
) -> InternshipApplication:
    return await transition(repo, KIND, application_id, Trigger.SUBMIT, actor)


async def get_application_status(
    repo: ApplicationRepository, application_id: int, actor: Actor
) -> str:
    """Return the status of an application the caller may read."""
    application = await repo.get_by_id(application_id)
    ensure_readable(actor, application, KIND, application_id)
    return application.status


async def list_applications_for_review(
    repo: ApplicationRepository,
    actor: Actor,
    pagination: Pagination,
    status: str | None = None,
    score_min: int | None = None,
) -> tuple[list[InternshipApplication], PageMeta]:
    """List applications in any status, oldest first, optionally with a minimum score."""
    filters: list[ColumnElement[bool]] = []
    if score_min is not None:
        filters.append(InternshipApplication.score >= score_min)

    return await list_submissions(
        repo,
        KIND,
        filters,
        pagination,
        ADMIN_ORDER,
        status=status,
        actor=actor,
        admin_view=True,
    )


async def score_application(
    repo: ApplicationRepository, application_id: int, actor: Actor, score: int
) -> InternshipApplication:
    """
    Record a reviewer's score.

    Raises:
        ValidationError: If the score is negative
    """
    if score < 0:
        raise ValidationError("Score must not be negative.", errors={"score": score})

    application = await _get_application(repo, application_id)
    ensure_authorized(actor, application, Action.MODERATE, KIND)

    application = await repo.update(application, {"score": score})
    logger.info(f"Reviewer {actor.id} scored application {application.id}: {score}")
    return application


async def advance_application(
    repo: ApplicationRepository, application_id: int, actor: Actor, to: str
) -> InternshipApplication:
    """Move an application to the reviewer-chosen status ``to``."""
    application = await transition(
        repo,
        KIND,
        application_id,
        Trigger.ADVANCE,
        actor,
        TransitionPayload(target_status=to),
    )
    logger.info(f"Reviewer {actor.id} moved application {application.id} to {application.status}")
    return application


async def bulk_advance(
    repo: ApplicationRepository, ids: list[int], actor: Actor, to: str
) -> int:
    """
    Move several applications to status ``to`` in a single update.

    Unknown ids are skipped.

    Returns:
        Number of applications updated

    Raises:
        ForbiddenError: If the caller is not a reviewer
        ValidationError: If ``to`` is empty
    """
    if actor.role not in policy_for(KIND).moderator_roles:
        logger.warning(f"Refused bulk advance for user {actor.id} ({actor.role})")
        raise ForbiddenError()

    target = to.strip()
    if not target:
        raise ValidationError("A target status is required.", errors={"action": "required"})

    updated = await repo.update_many(list(dict.fromkeys(ids)), {"status": target})
    logger.info(f"Reviewer {actor.id} moved {updated} application(s) to {target}")
    return updated
