"""
Startups Router

Endpoints:
- GET /startups/directory - Public directory (Approved)
- GET /startups/{slug} - Startup detail
- POST /startups - Create a startup (Draft)
- PATCH /startups/{id} - Update a startup
- POST /startups/{id}/submit - Submit for review
"""

from fastapi import APIRouter, Depends, Query, status

from innohub.core.auth import Actor, get_current_actor, get_optional_actor
from innohub.modules.startups import service
from innohub.modules.startups.schemas import StartupCreate, StartupResponse, StartupUpdate
from innohub.modules.startups.service import StartupRepository, get_repository
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

router = APIRouter()


@router.get(
    "/directory",
    response_model=Page[StartupResponse],
    summary="Startup Directory",
    description="Approved startups, featured first. Filter by `tag`, `stage`, `country`, `industry`.",
)
async def directory(
    tag: str | None = Query(None, max_length=50),
    stage: str | None = Query(None, max_length=50),
    country: str | None = Query(None, max_length=100),
    industry: str | None = Query(None, max_length=100),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: StartupRepository = Depends(get_repository),
) -> Page[StartupResponse]:
    startups, meta = await service.list_directory(
        repo,
        Pagination(page=page, limit=limit),
        tag=tag,
        stage=stage,
        country=country,
        industry=industry,
    )
    return Page[StartupResponse](
        data=[StartupResponse.model_validate(s) for s in startups],
        meta=meta,
    )


@router.get(
    "/{slug}",
    response_model=StartupResponse,
    summary="Get Startup",
    responses={404: {"description": "Startup not found or not visible to the caller"}},
)
async def get_startup(
    slug: str,
    repo: StartupRepository = Depends(get_repository),
    actor: Actor | None = Depends(get_optional_actor),
) -> StartupResponse:
    startup = await service.get_startup_by_slug(repo, slug, actor)
    return StartupResponse.model_validate(startup)


@router.post(
    "",
    response_model=StartupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Startup",
    responses={409: {"description": "A startup with this name already exists"}},
)
async def create_startup(
    data: StartupCreate,
    repo: StartupRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> StartupResponse:
    startup = await service.create_startup(repo, actor, data)
    return StartupResponse.model_validate(startup)


@router.patch(
    "/{startup_id}",
    response_model=StartupResponse,
    summary="Update Startup",
)
async def update_startup(
    startup_id: int,
    data: StartupUpdate,
    repo: StartupRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> StartupResponse:
    startup = await service.update_startup(repo, startup_id, actor, data)
    return StartupResponse.model_validate(startup)


@router.post(
    "/{startup_id}/submit",
    response_model=StartupResponse,
    summary="Submit Startup",
)
async def submit_startup(
    startup_id: int,
    repo: StartupRepository = Depends(get_repository),
    actor: Actor = Depends(get_current_actor),
) -> StartupResponse:
    startup = await service.submit_startup(repo, startup_id, actor)
    return StartupResponse.model_validate(startup)
