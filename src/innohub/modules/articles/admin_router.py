"""
Articles Admin Router

Endpoints for admins managing editorial content. All endpoints require the
ADMIN role; the authorization gate additionally checks ownership rules.

Endpoints:
- GET /admin/articles - List articles in any status
- POST /admin/articles - Create a draft article
- PATCH /admin/articles/{id} - Update fields and/or status
- POST /admin/articles/{id}/publish - Publish now
- DELETE /admin/articles/{id} - Delete an article
- POST /admin/articles/release-scheduled - Run the scheduled release job now
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from innohub.core.auth import Actor, require_roles
from innohub.modules.articles import jobs, service
from innohub.modules.articles.schemas import ArticleCreate, ArticleResponse, ArticleUpdate
from innohub.modules.articles.service import ArticleRepository, get_repository
from innohub.modules.users.models import UserRole
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination
from innohub.modules.workflow.statuses import ArticleStatus

logger = logging.getLogger(__name__)

router = APIRouter()

require_admin = require_roles(UserRole.ADMIN.value)


@router.get(
    "",
    response_model=Page[ArticleResponse],
    summary="List Articles (Admin)",
)
async def list_articles(
    status_filter: ArticleStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ArticleRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> Page[ArticleResponse]:
    articles, meta = await service.list_articles_for_admin(
        repo, admin, Pagination(page=page, limit=limit), status=status_filter
    )
    logger.info(f"Admin {admin.id} listed articles: total={meta.total}")
    return Page[ArticleResponse](
        data=[ArticleResponse.model_validate(a) for a in articles],
        meta=meta,
    )


@router.post(
    "",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Article",
    responses={409: {"description": "An article with this title already exists"}},
)
async def create_article(
    data: ArticleCreate,
    repo: ArticleRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ArticleResponse:
    article = await service.create_article(repo, admin, data)
    return ArticleResponse.model_validate(article)


@router.patch(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Update Article",
    description="""
Update article fields. Setting `status` applies the matching transition:

- `PUBLISHED`: publish now
- `SCHEDULED`: publish at `publish_at` (required)
- `DRAFT`: unpublish
""",
)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    repo: ArticleRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ArticleResponse:
    article = await service.update_article(repo, article_id, admin, data)
    return ArticleResponse.model_validate(article)


@router.post(
    "/release-scheduled",
    summary="Release Scheduled Articles",
    description="Run the scheduled release job immediately.",
)
async def release_scheduled(
    admin: Actor = Depends(require_admin),
) -> dict[str, Any]:
    logger.info(f"Admin {admin.id} triggered {jobs.JOB_ID_RELEASE_SCHEDULED}")
    return await jobs.release_scheduled_articles()


@router.post(
    "/{article_id}/publish",
    response_model=ArticleResponse,
    summary="Publish Article",
)
async def publish_article(
    article_id: int,
    repo: ArticleRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> ArticleResponse:
    article = await service.publish_article(repo, article_id, admin)
    return ArticleResponse.model_validate(article)


@router.delete(
    "/{article_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Article",
)
async def delete_article(
    article_id: int,
    repo: ArticleRepository = Depends(get_repository),
    admin: Actor = Depends(require_admin),
) -> None:
    await service.delete_article(repo, article_id, admin)
