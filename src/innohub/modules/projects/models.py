"""
Project Models

Community projects submitted by members for review, plus their media and
the flags raised against them by other users.
"""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from innohub.modules.shared import TimestampedModel
from innohub.modules.taxonomy.models import Tag, project_tags
from innohub.modules.workflow.statuses import ProjectStatus


class MediaType(str, enum.Enum):
    """Types of project media."""

    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


class Project(TimestampedModel):
    """
    Project showcase entry.

    Created PENDING by its owner, SUBMITTED for review, then APPROVED,
    FEATURED, REJECTED or sent back with CHANGES_REQUESTED by an admin.
    Public once APPROVED or FEATURED.
    """

    __tablename__ = "projects"

    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    summary: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Team
    team_name: Mapped[str] = mapped_column(String(200), nullable=False)
    team_members: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)

    # Links and metadata
    demo_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    repo_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    stack: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Workflow
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus, name="project_status"),
        nullable=False,
        default=ProjectStatus.PENDING,
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    featured_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    mod_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    tags: Mapped[list[Tag]] = relationship(secondary=project_tags, lazy="selectin")
    media: Mapped[list["ProjectMedia"]] = relationship(
        back_populates="project",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="ProjectMedia.id",
    )

    __table_args__ = (
        Index("uq_projects_slug", "slug", unique=True),
        Index("ix_projects_status_submitted_at", "status", "submitted_at"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, slug={self.slug}, status={self.status.value})>"


class ProjectMedia(TimestampedModel):
    """Image or video attached to a project. Only the URL is stored."""

    __tablename__ = "project_media"

    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[MediaType] = mapped_column(
        Enum(MediaType, name="media_type"), nullable=False, default=MediaType.IMAGE
    )

    project: Mapped[Project] = relationship(back_populates="media")


class ProjectFlag(TimestampedModel):
    """Report raised by a user against a project."""

    __tablename__ = "project_flags"

    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reporter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
