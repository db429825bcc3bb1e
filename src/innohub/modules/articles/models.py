"""
Article Models

Editorial articles written by admins and published on the public site.
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from innohub.modules.shared import TimestampedModel
from innohub.modules.taxonomy.models import Category, Tag, article_tags
from innohub.modules.workflow.statuses import ArticleStatus


class Article(TimestampedModel):
    """
    Editorial article.

    Public once PUBLISHED with a publish date in the past. SCHEDULED articles
    carry their future publish date in ``published_at`` until released.
    """

    __tablename__ = "articles"

    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # SEO
    meta_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    featured_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Workflow
    status: Mapped[ArticleStatus] = mapped_column(
        Enum(ArticleStatus, name="article_status"),
        nullable=False,
        default=ArticleStatus.DRAFT,
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )

    category: Mapped[Category | None] = relationship(lazy="selectin")
    tags: Mapped[list[Tag]] = relationship(secondary=article_tags, lazy="selectin")

    __table_args__ = (
        Index("uq_articles_slug", "slug", unique=True),
        Index("ix_articles_status_published_at", "status", "published_at"),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug={self.slug}, status={self.status.value})>"
