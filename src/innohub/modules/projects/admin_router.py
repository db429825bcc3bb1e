"""
Projects Admin Router

Moderation endpoints for projects. All endpoints require the ADMIN role.
Decision endpoints are rate limited per admin and email the owner.

Endpoints:
- GET /admin/projects - List projects in any status
- GET /admin/projects/{id}/flags - Open flags on a project
- POST /admin/projects/{id}/approve - Approve, optionally featured
- POST /admin/projects/{id}/reject - Reject with a reason
- POST /admin/projects/{id}/request-changes - Send back with a message
"""

import logging

from fastapi import APIRouter, Depends, Query

from innohub.core.auth import Actor, require_roles
from innohub.core.rate_limit import enforce_rate_limit
from innohub.modules.projects import service
from innohub.modules.projects.schemas import (
    ApproveRequest,
    FlagResponse,
    ProjectResponse,
    RejectRequest,
    RequestChangesRequest,
)
from innohub.modules.projects.service import ProjectRepository, get_repository
from innohub.modules.users.models import UserRole
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination
from innohub.modules.workflow.statuses import ProjectStatus

logger = logging.getLogger(__name__)

router = APIRouter()

require_admin = require_roles(UserRole.ADMIN.value)

# Rate limits for moderation endpoints
RATE_LIMIT_APPROVE = (10, 60)  # 10 approvals per minute
RATE_LIMIT_REJECT = (10, 60)  # 10 rejections per minute
RATE_LIMIT_REQUEST_CHANGES = (20, 60)  # 20 change requests per minute


@router.get(
    "",
    response_model=Page[ProjectResponse],
    summary="List Projects (Admin)",
    description="Projects in any status, ordered by status then oldest submission first.",
)
async def list_projects(
    status_filter: ProjectStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ProjectRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> Page[ProjectResponse]:
    projects, meta = await service.list_projects_for_admin(
        repo, admin, Pagination(page=page, limit=limit), status=status_filter
    )
    logger.info(f"Admin {admin.id} listed projects: total={meta.total}")
    return Page[ProjectResponse](
        data=[ProjectResponse.model_validate(p) for p in projects],
        meta=meta,
    )


@router.get(
    "/{project_id}/flags",
    response_model=list[FlagResponse],
    summary="List Open Flags",
)
async def list_flags(
    project_id: int,
    repo: ProjectRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> list[FlagResponse]:
    flags = await service.get_project_flags(repo, project_id, admin)
    return [FlagResponse.model_validate(f) for f in flags]


@router.post(
    "/{project_id}/approve",
    response_model=ProjectResponse,
    summary="Approve Project",
    description="Approve a project. With `featured: true` it becomes FEATURED.",
)
async def approve_project(
    project_id: int,
    data: ApproveRequest,
    repo: ProjectRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ProjectResponse:
    await enforce_rate_limit(admin, "project:approve", *RATE_LIMIT_APPROVE)
    project = await service.approve_project(repo, project_id, admin, featured=data.featured)
    return ProjectResponse.model_validate(project)


@router.post(
    "/{project_id}/reject",
    response_model=ProjectResponse,
    summary="Reject Project",
)
async def reject_project(
    project_id: int,
    data: RejectRequest,
    repo: ProjectRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ProjectResponse:
    await enforce_rate_limit(admin, "project:reject", *RATE_LIMIT_REJECT)
    project = await service.reject_project(repo, project_id, admin, data.reason)
    return ProjectResponse.model_validate(project)


@router.post(
    "/{project_id}/request-changes",
    response_model=ProjectResponse,
    summary="Request Changes",
)
async def request_changes(
    project_id: int,
    data: RequestChangesRequest,
    repo: ProjectRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ProjectResponse:
    await enforce_rate_limit(admin, "project:request_changes", *RATE_LIMIT_REQUEST_CHANGES)
    project = await service.request_project_changes(repo, project_id, admin, data.message)
    return ProjectResponse.model_validate(project)
