"""
Submission kinds and their role and visibility policies.
"""

from dataclasses import dataclass
from enum import Enum

from innohub.modules.users.models import UserRole
from innohub.modules.workflow.statuses import (
    ArticleStatus,
    InternshipStatus,
    ProjectStatus,
    StartupStatus,
)


class Kind(str, Enum):
    ARTICLE = "article"
    PROJECT = "project"
    STARTUP = "startup"
    INTERNSHIP = "internship"

    @property
    def label(self) -> str:
        return "internship application" if self is Kind.INTERNSHIP else self.value


@dataclass(frozen=True)
class KindPolicy:
    """
    Per-kind rules consulted by the authorization gate and listing service.

    Attributes:
        initial_status: Status a record is created in
        public_statuses: Statuses anyone, including anonymous callers, may read
        reader_roles: Roles that may read non-public records they do not own
        moderator_roles: Roles that may apply moderation triggers
        editable_statuses: Statuses in which the owner may update the record;
            None means the owner may update in any status
    """

    initial_status: str
    public_statuses: frozenset[str]
    reader_roles: frozenset[str]
    moderator_roles: frozenset[str]
    editable_statuses: frozenset[str] | None = None


_ADMIN = frozenset({UserRole.ADMIN.value})
_REVIEWERS = frozenset({UserRole.REVIEWER.value, UserRole.ADMIN.value})

POLICIES: dict[Kind, KindPolicy] = {
    Kind.ARTICLE: KindPolicy(
        initial_status=ArticleStatus.DRAFT.value,
        public_statuses=frozenset({ArticleStatus.PUBLISHED.value}),
        reader_roles=_ADMIN,
        moderator_roles=_ADMIN,
    ),
    Kind.PROJECT: KindPolicy(
        initial_status=ProjectStatus.PENDING.value,
        public_statuses=frozenset({ProjectStatus.APPROVED.value, ProjectStatus.FEATURED.value}),
        reader_roles=_ADMIN,
        moderator_roles=_ADMIN,
        editable_statuses=frozenset(
            {ProjectStatus.PENDING.value, ProjectStatus.CHANGES_REQUESTED.value}
        ),
    ),
    Kind.STARTUP: KindPolicy(
        initial_status=StartupStatus.DRAFT.value,
        public_statuses=frozenset({StartupStatus.APPROVED.value}),
        reader_roles=_REVIEWERS,
        moderator_roles=_REVIEWERS,
    ),
    Kind.INTERNSHIP: KindPolicy(
        initial_status=InternshipStatus.DRAFT.value,
        public_statuses=frozenset(),
        reader_roles=_REVIEWERS,
        moderator_roles=_REVIEWERS,
    ),
}


def policy_for(kind: Kind) -> KindPolicy:
    return POLICIES[kind]
