"""
Startups Review Router

Endpoints for reviewers. All endpoints require the REVIEWER or ADMIN role.

Endpoints:
- GET /admin/startups - List startups in any status
- POST /admin/startups/{id}/decision - Move to a chosen status
- PATCH /admin/startups/{id}/feature - Feature or unfeature
"""

import logging

from fastapi import APIRouter, Depends, Query

from innohub.core.auth import Actor, require_roles
from innohub.core.rate_limit import enforce_rate_limit
from innohub.modules.startups import service
from innohub.modules.startups.schemas import DecisionRequest, FeatureRequest, StartupResponse
from innohub.modules.startups.service import StartupRepository, get_repository
from innohub.modules.users.models import UserRole
from innohub.modules.workflow.engine import MAX_STATUS_LENGTH
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

logger = logging.getLogger(__name__)

router = APIRouter()

require_reviewer = require_roles(UserRole.REVIEWER.value, UserRole.ADMIN.value)

RATE_LIMIT_DECISION = (20, 60)  # 20 decisions per minute
RATE_LIMIT_FEATURE = (20, 60)  # 20 feature toggles per minute


@router.get(
    "",
    response_model=Page[StartupResponse],
    summary="List Startups (Review)",
)
async def list_startups(
    status_filter: str | None = Query(None, alias="status", max_length=MAX_STATUS_LENGTH),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: StartupRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> Page[StartupResponse]:
    startups, meta = await service.list_startups_for_review(
        repo, reviewer, Pagination(page=page, limit=limit), status=status_filter
    )
    logger.info(f"Reviewer {reviewer.id} listed startups: total={meta.total}")
    return Page[StartupResponse](
        data=[StartupResponse.model_validate(s) for s in startups],
        meta=meta,
    )


@router.post(
    "/{startup_id}/decision",
    response_model=StartupResponse,
    summary="Decide Startup",
    description="Move the startup to status `to`. An optional `message` is sent to the owner.",
)
async def decide_startup(
    startup_id: int,
    data: DecisionRequest,
    repo: StartupRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> StartupResponse:
    await enforce_rate_limit(reviewer, "startup:decision", *RATE_LIMIT_DECISION)
    startup = await service.decide_startup(repo, startup_id, reviewer, data.to, data.message)
    return StartupResponse.model_validate(startup)


@router.patch(
    "/{startup_id}/feature",
    response_model=StartupResponse,
    summary="Feature Startup",
)
async def feature_startup(
    startup_id: int,
    data: FeatureRequest,
    repo: StartupRepository = Depends(get_repository),
    reviewer: Actor = Depends(require_reviewer),
) -> StartupResponse:
    await enforce_rate_limit(reviewer, "startup:feature", *RATE_LIMIT_FEATURE)
    startup = await service.set_featured(repo, startup_id, reviewer, data.featured)
    return StartupResponse.model_validate(startup)
