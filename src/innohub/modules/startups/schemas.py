"""
Startup Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from innohub.modules.workflow.engine import MAX_STATUS_LENGTH


class StartupCreate(BaseModel):
    """Request body for POST /startups."""

    name: str = Field(..., min_length=1, max_length=200)
    tagline: str | None = Field(None, max_length=300)
    description: str | None = None
    website: str | None = Field(None, max_length=500)
    industry: str | None = Field(None, max_length=100)
    stage: str | None = Field(None, max_length=50)
    country: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)


class StartupUpdate(BaseModel):
    """Request body for PATCH /startups/{id}. Only the fields present are changed."""

    name: str | None = Field(None, min_length=1, max_length=200)
    tagline: str | None = Field(None, max_length=300)
    description: str | None = None
    website: str | None = Field(None, max_length=500)
    industry: str | None = Field(None, max_length=100)
    stage: str | None = Field(None, max_length=50)
    country: str | None = Field(None, max_length=100)
    tags: list[str] | None = None


class DecisionRequest(BaseModel):
    """Request body for POST /admin/startups/{id}/decision."""

    to: str = Field(..., min_length=1, max_length=MAX_STATUS_LENGTH)
    message: str | None = Field(None, max_length=2000)


class FeatureRequest(BaseModel):
    """Request body for PATCH /admin/startups/{id}/feature."""

    featured: bool


class StartupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    name: str
    tagline: str | None = None
    description: str | None = None
    website: str | None = None
    industry: str | None = None
    stage: str | None = None
    country: str | None = None
    tags: list[str] = Field(default_factory=list)
    featured: bool
    status: str
    mod_notes: str | None = None
    owner_id: int
    created_at: datetime
    updated_at: datetime
