"""
Startup Models

Startup profiles submitted by founders and reviewed for the public directory.
"""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from innohub.modules.shared import TimestampedModel
from innohub.modules.workflow.statuses import StartupStatus


class Startup(TimestampedModel):
    """
    Startup profile.

    Created as Draft, Submitted by its owner, then moved by a reviewer to
    any status they choose. Listed publicly once Approved.
    """

    __tablename__ = "startups"

    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    tagline: Mapped[str | None] = mapped_column(String(300), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Directory facets
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    stage: Mapped[str | None] = mapped_column(String(50), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Workflow (free text: reviewers may choose the target status)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=StartupStatus.DRAFT.value, index=True
    )
    mod_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (Index("uq_startups_slug", "slug", unique=True),)

    def __repr__(self) -> str:
        return f"<Startup(id={self.id}, slug={self.slug}, status={self.status})>"
