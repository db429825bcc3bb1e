"""
Internship Applications Review Router

All endpoints require the REVIEWER or ADMIN role.

Endpoints:
- GET /admin/internship-applications - List applications (status, score_min)
- POST /admin/internship-applications/{id}/score - Score an application
- POST /admin/internship-applications/{id}/advance - Move to a chosen status
- POST /admin/internship-applications/bulk - Move many applications at once
"""

import logging

from fastapi import APIRouter, Depends, Query

from innohub.core.auth import Actor, require_roles
from innohub.core.rate_limit import enforce_rate_limit
from innohub.modules.internships import service
from innohub.modules.internships.schemas import (
    AdvanceRequest,
    ApplicationResponse,
    BulkAdvanceRequest,
    BulkAdvanceResponse,
    ScoreRequest,
)
from innohub.modules.internships.service import ApplicationRepository, get_repository
from innohub.modules.users.models import UserRole
from innohub.modules.workflow.engine import MAX_STATUS_LENGTH
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

logger = logging.getLogger(__name__)

router = APIRouter()

require_reviewer = require_roles(UserRole.REVIEWER.value, UserRole.ADMIN.value)

RATE_LIMIT_ADVANCE = (30, 60)  # 30 per minute
RATE_LIMIT_BULK = (5, 60)  # 5 per minute


@router.get(
    "",
    response_model=Page[ApplicationResponse],
    summary="List Applications (Review)",
)
async def list_applications(
    status_filter: str | None = Query(None, alias="status", max_length=MAX_STATUS_LENGTH),
    score_min: int | None = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ApplicationRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> Page[ApplicationResponse]:
    applications, meta = await service.list_applications_for_review(
        repo,
        reviewer,
        Pagination(page=page, limit=limit),
        status=status_filter,
        score_min=score_min,
    )
    return Page[ApplicationResponse](
        data=[ApplicationResponse.model_validate(a) for a in applications],
        meta=meta,
    )


@router.post(
    "/bulk",
    response_model=BulkAdvanceResponse,
    summary="Bulk Advance Applications",
    description="Move every listed application to status `action`. Unknown ids are skipped.",
)
async def bulk_advance(
    data: BulkAdvanceRequest,
    repo: ApplicationRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> BulkAdvanceResponse:
    await enforce_rate_limit(reviewer, "internship:bulk", *RATE_LIMIT_BULK)
    updated = await service.bulk_advance(repo, data.ids, reviewer, data.action)
    return BulkAdvanceResponse(updated=updated)


@router.post(
    "/{application_id}/score",
    response_model=ApplicationResponse,
    summary="Score Application",
)
async def score_application(
    application_id: int,
    data: ScoreRequest,
    repo: ApplicationRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> ApplicationResponse:
    application = await service.score_application(repo, application_id, reviewer, data.score)
    return ApplicationResponse.model_validate(application)


@router.post(
    "/{application_id}/advance",
    response_model=ApplicationResponse,
    summary="Advance Application",
)
async def advance_application(
    application_id: int,
    data: AdvanceRequest,
    repo: ApplicationRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> ApplicationResponse:
    await enforce_rate_limit(reviewer, "internship:advance", *RATE_LIMIT_ADVANCE)
    application = await service.advance_application(repo, application_id, reviewer, data.to)
    return ApplicationResponse.model_validate(application)
