"""
Project Schemas

Pydantic schemas for request validation and response serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from innohub.modules.projects.models import MediaType
from innohub.modules.taxonomy.schemas import TagResponse
from innohub.modules.workflow.statuses import ProjectStatus


class TeamMember(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str | None = Field(None, max_length=100)
    link: str | None = Field(None, max_length=500)


class ProjectCreate(BaseModel):
    """Request body for POST /projects."""

    title: str = Field(..., min_length=1, max_length=200)
    summary: str = Field(..., min_length=1, max_length=500)
    team_name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    team_members: list[TeamMember] | None = None
    demo_link: str | None = Field(None, max_length=500)
    repo_link: str | None = Field(None, max_length=500)
    stack: list[str] = Field(default_factory=list)
    country: str | None = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    """Request body for PATCH /projects/{id}. Only the fields present are changed."""

    title: str | None = Field(None, min_length=1, max_length=200)
    summary: str | None = Field(None, min_length=1, max_length=500)
    team_name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    team_members: list[TeamMember] | None = None
    demo_link: str | None = Field(None, max_length=500)
    repo_link: str | None = Field(None, max_length=500)
    stack: list[str] | None = None
    country: str | None = Field(None, max_length=100)
    tags: list[str] | None = None


class MediaCreate(BaseModel):
    """Request body for POST /projects/{id}/media."""

    url: str = Field(..., min_length=1, max_length=500)
    type: MediaType = MediaType.IMAGE


class FlagCreate(BaseModel):
    """Request body for POST /projects/{id}/flag."""

    reason: str = Field(..., min_length=1, max_length=2000)


class ApproveRequest(BaseModel):
    """Request body for POST /admin/projects/{id}/approve."""

    featured: bool = False


class RejectRequest(BaseModel):
    """Request body for POST /admin/projects/{id}/reject."""

    reason: str = Field(..., min_length=1, max_length=2000)


class RequestChangesRequest(BaseModel):
    """Request body for POST /admin/projects/{id}/request-changes."""

    message: str = Field(..., min_length=1, max_length=2000)


class MediaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    type: MediaType


class FlagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    reporter_id: int
    reason: str
    resolved: bool
    created_at: datetime


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    summary: str
    description: str | None = None
    team_name: str
    team_members: list[TeamMember] | None = None
    demo_link: str | None = None
    repo_link: str | None = None
    stack: list[str] = Field(default_factory=list)
    country: str | None = None
    cover_image: str | None = None
    status: ProjectStatus
    submitted_at: datetime | None = None
    featured_at: datetime | None = None
    mod_notes: str | None = None
    owner_id: int
    tags: list[TagResponse] = Field(default_factory=list)
    media: list[MediaResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
