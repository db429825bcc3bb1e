"""
User Models

Database models for user accounts and roles.
"""

import enum

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from innohub.modules.shared import TimestampedModel


class UserRole(str, enum.Enum):
    """User roles in the system."""

    ADMIN = "ADMIN"
    REVIEWER = "REVIEWER"
    MEMBER = "MEMBER"
    USER = "USER"


class User(TimestampedModel):
    """
    User model for authentication and authorization.

    ADMIN moderates articles and projects and may edit any record.
    REVIEWER moderates startups and internship applications.
    """

    __tablename__ = "users"

    # Authentication fields
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Profile
    name: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    avatar_url: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Role and account status
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.USER,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"

    @property
    def display_name(self) -> str:
        """Return the profile name, falling back to the email address."""
        return self.name or self.email
