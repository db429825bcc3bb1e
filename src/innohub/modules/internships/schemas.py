"""
Internship Application Schemas
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from innohub.modules.workflow.engine import MAX_STATUS_LENGTH


class ApplicationCreate(BaseModel):
    """Request body for POST /internship-applications."""

    position: str = Field(..., min_length=1, max_length=200)
    motivation: str | None = None
    resume_url: str | None = Field(None, max_length=500)
    answers: dict[str, Any] | None = None


class ApplicationUpdate(BaseModel):
    """Request body for PATCH /internship-applications/{id}."""

    position: str | None = Field(None, min_length=1, max_length=200)
    motivation: str | None = None
    resume_url: str | None = Field(None, max_length=500)
    answers: dict[str, Any] | None = None


class ScoreRequest(BaseModel):
    score: int = Field(..., ge=0)


class AdvanceRequest(BaseModel):
    to: str = Field(..., min_length=1, max_length=MAX_STATUS_LENGTH)


class BulkAdvanceRequest(BaseModel):
    """Request body for POST /admin/internship-applications/bulk."""

    ids: list[int] = Field(..., min_length=1, max_length=100)
    action: str = Field(..., min_length=1, max_length=MAX_STATUS_LENGTH)


class BulkAdvanceResponse(BaseModel):
    updated: int


class ApplicationStatusResponse(BaseModel):
    status: str


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    position: str
    motivation: str | None = None
    resume_url: str | None = None
    answers: dict[str, Any] | None = None
    score: int | None = None
    status: str
    mod_notes: str | None = None
    owner_id: int
    created_at: datetime
    updated_at: datetime
