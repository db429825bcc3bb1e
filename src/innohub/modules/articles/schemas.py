"""
Article Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from innohub.modules.taxonomy.schemas import CategoryResponse, TagResponse
from innohub.modules.workflow.statuses import ArticleStatus


class ArticleCreate(BaseModel):
    """
    Request body for POST /admin/articles.

    The category is given either by ``category_id`` or by ``category_name``
    (created if it does not exist). Tags are given by name and created as
    needed.
    """

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    summary: str | None = Field(None, max_length=500)
    meta_title: str | None = Field(None, max_length=200)
    meta_description: str | None = Field(None, max_length=300)
    featured_image: str | None = Field(None, max_length=500)
    category_id: int | None = None
    category_name: str | None = Field(None, min_length=1, max_length=100)
    tags: list[str] = Field(default_factory=list)


class ArticleUpdate(BaseModel):
    """
    Request body for PATCH /admin/articles/{id}.

    Only the fields present are changed. Setting ``status`` applies the
    matching transition: PUBLISHED publishes now, SCHEDULED requires
    ``publish_at``, DRAFT unpublishes.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    summary: str | None = Field(None, max_length=500)
    meta_title: str | None = Field(None, max_length=200)
    meta_description: str | None = Field(None, max_length=300)
    featured_image: str | None = Field(None, max_length=500)
    category_id: int | None = None
    category_name: str | None = Field(None, min_length=1, max_length=100)
    tags: list[str] | None = None
    status: ArticleStatus | None = None
    publish_at: datetime | None = None

    @model_validator(mode="after")
    def validate_schedule(self) -> "ArticleUpdate":
        if self.status == ArticleStatus.SCHEDULED and self.publish_at is None:
            raise ValueError("publish_at is required when scheduling an article")
        return self


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    content: str
    summary: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    featured_image: str | None = None
    status: ArticleStatus
    published_at: datetime | None = None
    owner_id: int
    category: CategoryResponse | None = None
    tags: list[TagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
