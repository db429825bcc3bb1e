"""
Projects Router

Endpoints:
- GET /projects - Public directory (APPROVED and FEATURED)
- GET /projects/{slug} - Project detail
- POST /projects - Create a project (PENDING)
- PATCH /projects/{id} - Update a project
- POST /projects/{id}/media - Attach an image or video URL
- POST /projects/{id}/submit - Submit for review
- POST /projects/{id}/flag - Flag a project (rate limited)
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from innohub.core.auth import Actor, get_current_actor, get_optional_actor
from innohub.core.rate_limit import enforce_rate_limit
from innohub.modules.projects import service
from innohub.modules.projects.schemas import (
    FlagCreate,
    FlagResponse,
    MediaCreate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from innohub.modules.projects.service import ProjectRepository, get_repository
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_FLAG = (5, 60)  # 5 flags per minute


@router.get(
    "",
    response_model=Page[ProjectResponse],
    summary="List Projects",
    description="""
Public project directory. Only APPROVED and FEATURED projects are listed;
featured projects first, then newest.

**Filters:** `tag` (tag slug), `team` (team name substring), `stack`,
`country`, `status` (APPROVED or FEATURED; other values are ignored).
""",
)
async def list_projects(
    status_filter: str | None = Query(None, alias="status"),
    tag: str | None = Query(None, max_length=120),
    team: str | None = Query(None, max_length=200),
    stack: str | None = Query(None, max_length=50),
    country: str | None = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ProjectRepository = Depends(get_repository),
) -> Page[ProjectResponse]:
    projects, meta = await service.list_public_projects(
        repo,
        Pagination(page=page, limit=limit),
        status=status_filter,
        tag=tag,
        team=team,
        stack=stack,
        country=country,
    )
    return Page[ProjectResponse](
        data=[ProjectResponse.model_validate(p) for p in projects],
        meta=meta,
    )


@router.get(
    "/{slug}",
    response_model=ProjectResponse,
    summary="Get Project",
    responses={404: {"description": "Project not found or not visible to the caller"}},
)
async def get_project(
    slug: str,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor | None = Depends(get_optional_actor),
) -> ProjectResponse:
    project = await service.get_project_by_slug(repo, slug, actor)
    return ProjectResponse.model_validate(project)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Project",
    responses={409: {"description": "A project with this title already exists"}},
)
async def create_project(
    data: ProjectCreate,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ProjectResponse:
    project = await service.create_project(repo, actor, data)
    return ProjectResponse.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update Project",
    description="Owners may edit while PENDING or CHANGES_REQUESTED. Admins may always edit.",
)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ProjectResponse:
    project = await service.update_project(repo, project_id, actor, data)
    return ProjectResponse.model_validate(project)


@router.post(
    "/{project_id}/media",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Project Media",
)
async def add_media(
    project_id: int,
    data: MediaCreate,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ProjectResponse:
    project = await service.add_project_media(repo, project_id, actor, data)
    return ProjectResponse.model_validate(project)


@router.post(
    "/{project_id}/submit",
    response_model=ProjectResponse,
    summary="Submit Project",
    responses={409: {"description": "Project is not PENDING or CHANGES_REQUESTED"}},
)
async def submit_project(
    project_id: int,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ProjectResponse:
    project = await service.submit_project(repo, project_id, actor)
    return ProjectResponse.model_validate(project)


@router.post(
    "/{project_id}/flag",
    response_model=FlagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Flag Project",
    responses={429: {"description": "Too many flags"}},
)
async def flag_project(
    project_id: int,
    data: FlagCreate,
    repo: ProjectRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> FlagResponse:
    await enforce_rate_limit(actor, "project:flag", *RATE_LIMIT_FLAG)
    flag = await service.flag_project(repo, project_id, actor, data)
    return FlagResponse.model_validate(flag)
