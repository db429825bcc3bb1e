"""
Internship Applications Router

Endpoints:
- GET /internship-applications/me - List my applications
- POST /internship-applications - Create an application (Draft)
- PATCH /internship-applications/{id} - Update an application
- POST /internship-applications/{id}/submit - Submit an application
- GET /internship-applications/{id}/status - Application status
"""

from fastapi import APIRouter, Depends, Query, status

from innohub.core.auth import Actor, get_current_actor
from innohub.modules.internships import service
from innohub.modules.internships.schemas import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusResponse,
    ApplicationUpdate,
)
from innohub.modules.internships.service import ApplicationRepository, get_repository
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

router = APIRouter()


@router.get(
    "/me",
    response_model=Page[ApplicationResponse],
    summary="My Applications",
)
async def my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ApplicationRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> Page[ApplicationResponse]:
    applications, meta = await service.list_my_applications(
        repo, actor, Pagination(page=page, limit=limit)
    )
    return Page[ApplicationResponse](
        data=[ApplicationResponse.model_validate(a) for a in applications],
        meta=meta,
    )


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Application",
)
async def create_application(
    data: ApplicationCreate,
    repo: ApplicationRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationResponse:
    application = await service.create_application(repo, actor, data)
    return ApplicationResponse.model_validate(application)


@router.patch(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Update Application",
)
async def update_application(
    application_id: int,
    data: ApplicationUpdate,
    repo: ApplicationRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationResponse:
    application = await service.update_application(repo, application_id, actor, data)
    return ApplicationResponse.model_validate(application)


@router.post(
    "/{application_id}/submit",
    response_model=ApplicationResponse,
    summary="Submit Application",
)
async def submit_application(
    application_id: int,
    repo: ApplicationRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationResponse:
    application = await service.submit_application(repo, application_id, actor)
    return ApplicationResponse.model_validate(application)


@router.get(
    "/{application_id}/status",
    response_model=ApplicationStatusResponse,
    summary="Application Status",
    responses={404: {"description": "Application not found or not visible to the caller"}},
)
async def application_status(
    application_id: int,
    repo: ApplicationRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationStatusResponse:
    current = await service.get_application_status(repo, application_id, actor)
    return ApplicationStatusResponse(status=current)
