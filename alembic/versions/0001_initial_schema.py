"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 12:00:00.000000

This migration:
1. Creates the enum types for user roles, article and project statuses, media types
2. Creates users, tags and categories
3. Creates articles, projects, startups and internship_applications with
   unique slug indexes
4. Creates the tag association tables, project media and project flags

Startup and internship application statuses are free text (reviewers
choose the target status), so they have no enum type.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


user_role = postgresql.ENUM("ADMIN", "REVIEWER", "MEMBER", "USER", name="user_role", create_type=False)
article_status = postgresql.ENUM(
    "DRAFT", "PUBLISHED", "SCHEDULED", name="article_status", create_type=False
)
project_status = postgresql.ENUM(
    "PENDING",
    "SUBMITTED",
    "APPROVED",
    "FEATURED",
    "CHANGES_REQUESTED",
    "REJECTED",
    name="project_status",
    create_type=False,
)
media_type = postgresql.ENUM("IMAGE", "VIDEO", name="media_type", create_type=False)

ENUMS = (user_role, article_status, project_status, media_type)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _owner() -> sa.Column:
    return sa.Column(
        "owner_id",
        sa.Integer(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    """Create every table."""
    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "users",
        *_timestamps(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    for table in ("tags", "categories"):
        op.create_table(
            table,
            *_timestamps(),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("slug", sa.String(length=120), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name"),
        )
        op.create_index(f"ix_{table}_slug", table, ["slug"], unique=True)

    # Articles
    op.create_table(
        "articles",
        *_timestamps(),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("summary", sa.String(length=500), nullable=True),
        sa.Column("meta_title", sa.String(length=200), nullable=True),
        sa.Column("meta_description", sa.String(length=300), nullable=True),
        sa.Column("featured_image", sa.String(length=500), nullable=True),
        sa.Column("status", article_status, nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        _owner(),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_articles_slug", "articles", ["slug"], unique=True)
    op.create_index("ix_articles_status_published_at", "articles", ["status", "published_at"])
    op.create_index("ix_articles_owner_id", "articles", ["owner_id"])

    # Projects
    op.create_table(
        "projects",
        *_timestamps(),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("summary", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("team_name", sa.String(length=200), nullable=False),
        sa.Column("team_members", postgresql.JSON(), nullable=True),
        sa.Column("demo_link", sa.String(length=500), nullable=True),
        sa.Column("repo_link", sa.String(length=500), nullable=True),
        sa.Column("stack", postgresql.ARRAY(sa.String(length=50)), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("cover_image", sa.String(length=500), nullable=True),
        sa.Column("status", project_status, nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("featured_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("mod_notes", sa.Text(), nullable=True),
        _owner(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_projects_slug", "projects", ["slug"], unique=True)
    op.create_index("ix_projects_status_submitted_at", "projects", ["status", "submitted_at"])
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])

    op.create_table(
        "project_media",
        *_timestamps(),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("type", media_type, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_media_project_id", "project_media", ["project_id"])

    op.create_table(
        "project_flags",
        *_timestamps(),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "reporter_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("resolved", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_flags_project_id", "project_flags", ["project_id"])

    # Startups
    op.create_table(
        "startups",
        *_timestamps(),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("tagline", sa.String(length=300), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("industry", sa.String(length=100), nullable=True),
        sa.Column("stage", sa.String(length=50), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("tags", postgresql.ARRAY(sa.String(length=50)), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("mod_notes", sa.Text(), nullable=True),
        _owner(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_startups_slug", "startups", ["slug"], unique=True)
    op.create_index("ix_startups_industry", "startups", ["industry"])
    op.create_index("ix_startups_status", "startups", ["status"])
    op.create_index("ix_startups_owner_id", "startups", ["owner_id"])

    # Internship applications
    op.create_table(
        "internship_applications",
        *_timestamps(),
        sa.Column("position", sa.String(length=200), nullable=False),
        sa.Column("motivation", sa.Text(), nullable=True),
        sa.Column("resume_url", sa.String(length=500), nullable=True),
        sa.Column("answers", postgresql.JSON(), nullable=True),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("mod_notes", sa.Text(), nullable=True),
        _owner(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_internship_applications_score", "internship_applications", ["score"])
    op.create_index("ix_internship_applications_status", "internship_applications", ["status"])
    op.create_index(
        "ix_internship_applications_owner_id", "internship_applications", ["owner_id"]
    )

    # Tag associations
    op.create_table(
        "article_tags",
        sa.Column(
            "article_id",
            sa.Integer(),
            sa.ForeignKey("articles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id", sa.Integer(), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
        ),
    )
    op.create_table(
        "project_tags",
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id", sa.Integer(), sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
        ),
    )


def downgrade() -> None:
    """Drop every table and enum type."""
    for table in (
        "project_tags",
        "article_tags",
        "internship_applications",
        "startups",
        "project_flags",
        "project_media",
        "projects",
        "articles",
        "categories",
        "tags",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in reversed(ENUMS):
        enum_type.drop(bind, checkfirst=True)
