"""
Status values for each submission kind.
"""

from enum import Enum


class ArticleStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    SCHEDULED = "SCHEDULED"


class ProjectStatus(str, Enum):
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    FEATURED = "FEATURED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    REJECTED = "REJECTED"


class StartupStatus(str, Enum):
    """
    Well-known startup statuses.

    Reviewers may move a startup to any other status string, so the column
    stores plain text and these are only the values the system itself sets.
    """

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"


class InternshipStatus(str, Enum):
    """Well-known internship application statuses. Reviewers may set others."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"


def status_value(status: Enum | str | None) -> str | None:
    """Return the plain string for an enum member or a raw status string."""
    if isinstance(status, Enum):
        return status.value
    return status
