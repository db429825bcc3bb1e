"""
Tests for the authorization gate.
"""

from unittest.mock import MagicMock

import pytest

from innohub.core.exceptions import ForbiddenError, NotFoundError, UnauthenticatedError
from innohub.modules.workflow.authorization import (
    Action,
    authorize,
    ensure_authorized,
    ensure_readable,
)
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.statuses import ArticleStatus, ProjectStatus, StartupStatus


def make_record(status, owner_id=10, record_id=5):
    record = MagicMock()
    record.id = record_id
    record.owner_id = owner_id
    record.status = status
    return record


# ============================================
# READ
# ============================================


def test_public_status_readable_by_anyone():
    record = make_record(ProjectStatus.APPROVED)
    assert authorize(None, record, Action.READ, Kind.PROJECT) is True


def test_non_public_status_hidden_from_anonymous():
    record = make_record(ProjectStatus.PENDING)
    assert authorize(None, record, Action.READ, Kind.PROJECT) is False


def test_non_public_status_readable_by_owner_and_admin(owner, admin, other_user):
    record = make_record(ArticleStatus.DRAFT, owner_id=owner.id)

    assert authorize(owner, record, Action.READ, Kind.ARTICLE) is True
    assert authorize(admin, record, Action.READ, Kind.ARTICLE) is True
    assert authorize(other_user, record, Action.READ, Kind.ARTICLE) is False


def test_reviewer_reads_startups_but_not_projects(reviewer):
    """Test that reader roles are per kind."""
    startup = make_record(StartupStatus.SUBMITTED.value)
    project = make_record(ProjectStatus.SUBMITTED)

    assert authorize(reviewer, startup, Action.READ, Kind.STARTUP) is True
    assert authorize(reviewer, project, Action.READ, Kind.PROJECT) is False


def test_internship_never_public(owner, other_user):
    record = make_record("Submitted", owner_id=owner.id)

    assert authorize(None, record, Action.READ, Kind.INTERNSHIP) is False
    assert authorize(other_user, record, Action.READ, Kind.INTERNSHIP) is False
    assert authorize(owner, record, Action.READ, Kind.INTERNSHIP) is True


# ============================================
# MODERATE
# ============================================


def test_moderate_requires_moderator_role(admin, reviewer, owner):
    project = make_record(ProjectStatus.SUBMITTED, owner_id=owner.id)
    startup = make_record("Submitted", owner_id=owner.id)

    assert authorize(admin, project, Action.MODERATE, Kind.PROJECT) is True
    assert authorize(reviewer, project, Action.MODERATE, Kind.PROJECT) is False
    assert authorize(owner, project, Action.MODERATE, Kind.PROJECT) is False
    assert authorize(reviewer, startup, Action.MODERATE, Kind.STARTUP) is True


# ============================================
# Owner actions
# ============================================


@pytest.mark.parametrize(
    ("status", "allowed"),
    [
        (ProjectStatus.PENDING, True),
        (ProjectStatus.CHANGES_REQUESTED, True),
        (ProjectStatus.SUBMITTED, False),
        (ProjectStatus.APPROVED, False),
        (ProjectStatus.FEATURED, False),
        (ProjectStatus.REJECTED, False),
    ],
)
def test_project_owner_update_depends_on_status(owner, status, allowed):
    record = make_record(status, owner_id=owner.id)
    assert authorize(owner, record, Action.UPDATE, Kind.PROJECT) is allowed


def test_admin_updates_project_in_any_status(admin, owner):
    record = make_record(ProjectStatus.APPROVED, owner_id=owner.id)
    assert authorize(admin, record, Action.UPDATE, Kind.PROJECT) is True


def test_article_owner_updates_in_any_status(owner):
    record = make_record(ArticleStatus.PUBLISHED, owner_id=owner.id)
    assert authorize(owner, record, Action.UPDATE, Kind.ARTICLE) is True


def test_non_owner_never_mutates(other_user):
    record = make_record(ProjectStatus.PENDING, owner_id=10)

    for action in (Action.UPDATE, Action.DELETE, Action.SUBMIT, Action.PUBLISH, Action.ADD_MEDIA):
        assert authorize(other_user, record, action, Kind.PROJECT) is False


def test_anonymous_never_mutates():
    record = make_record(ArticleStatus.PUBLISHED)
    assert authorize(None, record, Action.UPDATE, Kind.ARTICLE) is False


# ============================================
# ensure_authorized / ensure_readable
# ============================================


def test_ensure_authorized_anonymous_raises_unauthenticated():
    record = make_record(ProjectStatus.PENDING)

    with pytest.raises(UnauthenticatedError):
        ensure_authorized(None, record, Action.SUBMIT, Kind.PROJECT)


def test_ensure_authorized_owner_of_approved_project(owner):
    """Test that an owner editing a locked project gets an explanatory error."""
    record = make_record(ProjectStatus.APPROVED, owner_id=owner.id)

    with pytest.raises(ForbiddenError) as exc_info:
        ensure_authorized(owner, record, Action.UPDATE, Kind.PROJECT)

    assert "APPROVED" in exc_info.value.message


def test_ensure_authorized_other_user_forbidden(other_user):
    record = make_record(ProjectStatus.PENDING)

    with pytest.raises(ForbiddenError):
        ensure_authorized(other_user, record, Action.UPDATE, Kind.PROJECT)


def test_ensure_authorized_allows(admin):
    record = make_record(ProjectStatus.SUBMITTED)
    ensure_authorized(admin, record, Action.MODERATE, Kind.PROJECT)


def test_ensure_readable_missing_record():
    with pytest.raises(NotFoundError):
        ensure_readable(None, None, Kind.PROJECT, "missing")


def test_ensure_readable_hides_non_public_record(other_user):
    record = make_record(ProjectStatus.PENDING)

    with pytest.raises(NotFoundError) as exc_info:
        ensure_readable(other_user, record, Kind.PROJECT, "secret-project")

    assert exc_info.value.status_code == 404
