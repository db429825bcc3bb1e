"""
Internship Application Models
"""

from typing import Any

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.orm import Mapped, mapped_column

from innohub.modules.shared import TimestampedModel
from innohub.modules.workflow.statuses import InternshipStatus


class InternshipApplication(TimestampedModel):
    """
    Application for an internship position.

    Never public: visible to the applicant and to reviewers only. Reviewers
    score applications and move them to any status they choose.
    """

    __tablename__ = "internship_applications"

    position: Mapped[str] = mapped_column(String(200), nullable=False)
    motivation: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    answers: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=InternshipStatus.DRAFT.value, index=True
    )
    mod_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<InternshipApplication(id={self.id}, position={self.position}, status={self.status})>"
