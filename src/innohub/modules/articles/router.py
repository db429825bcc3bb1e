"""
Articles Public Router

Endpoints:
- GET /articles - List published articles
- GET /articles/{slug} - Get an article by slug
- GET /articles/{article_id}/related - Related published articles
"""

from fastapi import APIRouter, Depends, Query

from innohub.core.auth import Actor, get_optional_actor
from innohub.modules.articles import service
from innohub.modules.articles.schemas import ArticleResponse
from innohub.modules.articles.service import ArticleRepository, get_repository
from innohub.modules.workflow.listing import DEFAULT_LIMIT, MAX_LIMIT, Page, Pagination

router = APIRouter()


@router.get(
    "",
    response_model=Page[ArticleResponse],
    summary="List Published Articles",
    description="Published articles, newest first. Filter by tag slug and category slug.",
)
async def list_articles(
    tag: str | None = Query(None, max_length=120, description="Tag slug"),
    category: str | None = Query(None, max_length=120, description="Category slug"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    repo: ArticleRepository = Depends(get_repository),
) -> Page[ArticleResponse]:
    articles, meta = await service.list_published_articles(
        repo,
        Pagination(page=page, limit=limit),
        tag=tag,
        category=category,
    )
    return Page[ArticleResponse](
        data=[ArticleResponse.model_validate(a) for a in articles],
        meta=meta,
    )


@router.get(
    "/{article_id}/related",
    response_model=list[ArticleResponse],
    summary="Related Articles",
    description="Up to three published articles sharing a tag, else the same category.",
)
async def related_articles(
    article_id: int,
    repo: ArticleRepository = Depends(get_repository),
    actor: Actor | None = Depends(get_optional_actor),
) -> list[ArticleResponse]:
    articles = await service.get_related_articles(repo, article_id, actor)
    return [ArticleResponse.model_validate(a) for a in articles]


@router.get(
    "/{slug}",
    response_model=ArticleResponse,
    summary="Get Article",
    responses={404: {"description": "Article not found or not visible to the caller"}},
)
async def get_article(
    slug: str,
    repo: ArticleRepository = Depends(get_repository),
    actor: Actor | None = Depends(get_optional_actor),
) -> ArticleResponse:
    article = await service.get_article_by_slug(repo, slug, actor)
    return ArticleResponse.model_validate(article)
