"""
Tests for the status workflow engine.

These tests verify:
- The transition table for every kind
- Payload validation (notes, publish date, reviewer-chosen status)
- That refused transitions never write to the repository
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from innohub.core.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from innohub.modules.projects.models import Project
from innohub.modules.workflow.engine import (
    MAX_STATUS_LENGTH,
    TRANSITIONS,
    TransitionPayload,
    Trigger,
    apply_transition,
    get_rule,
    plan_transition,
    transition,
)
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.statuses import ArticleStatus, ProjectStatus

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_record(status, owner_id=10, record_id=7):
    record = MagicMock()
    record.id = record_id
    record.owner_id = owner_id
    record.status = status
    record.submitted_at = None
    record.featured_at = None
    record.mod_notes = None
    return record


# ============================================
# Transition table
# ============================================


def test_every_rule_is_keyed_by_its_kind_and_trigger():
    for (kind, trigger), rule in TRANSITIONS.items():
        assert rule.kind is kind
        assert rule.trigger is trigger


def test_undefined_trigger_has_no_rule():
    assert get_rule(Kind.STARTUP, Trigger.APPROVE) is None
    assert get_rule(Kind.ARTICLE, Trigger.SUBMIT) is None


# ============================================
# plan_transition: projects
# ============================================


@pytest.mark.parametrize("status", [ProjectStatus.PENDING, ProjectStatus.CHANGES_REQUESTED])
def test_project_submit_sets_submitted_at(status):
    changes = plan_transition(Kind.PROJECT, make_record(status), Trigger.SUBMIT, now=NOW)

    assert changes == {"status": "SUBMITTED", "submitted_at": NOW}


@pytest.mark.parametrize(
    "status",
    [ProjectStatus.SUBMITTED, ProjectStatus.APPROVED, ProjectStatus.FEATURED, ProjectStatus.REJECTED],
)
def test_project_submit_refused_from_other_statuses(status):
    with pytest.raises(InvalidStateError) as exc_info:
        plan_transition(Kind.PROJECT, make_record(status), Trigger.SUBMIT, now=NOW)

    assert exc_info.value.current_status == status.value
    assert exc_info.value.errors["allowed_from"] == ["CHANGES_REQUESTED", "PENDING"]


def test_project_approve_clears_featured_at():
    changes = plan_transition(
        Kind.PROJECT, make_record(ProjectStatus.FEATURED), Trigger.APPROVE, now=NOW
    )
    assert changes == {"status": "APPROVED", "featured_at": None}


def test_project_feature_sets_featured_at():
    changes = plan_transition(
        Kind.PROJECT, make_record(ProjectStatus.SUBMITTED), Trigger.FEATURE, now=NOW
    )
    assert changes == {"status": "FEATURED", "featured_at": NOW}


@pytest.mark.parametrize("trigger", [Trigger.REJECT, Trigger.REQUEST_CHANGES])
def test_project_moderation_requires_notes(trigger):
    record = make_record(ProjectStatus.SUBMITTED)

    with pytest.raises(ValidationError):
        plan_transition(Kind.PROJECT, record, trigger, TransitionPayload(notes="  "), now=NOW)


def test_project_reject_stores_notes():
    changes = plan_transition(
        Kind.PROJECT,
        make_record(ProjectStatus.SUBMITTED),
        Trigger.REJECT,
        TransitionPayload(notes="Spam"),
        now=NOW,
    )
    assert changes == {"status": "REJECTED", "mod_notes": "Spam"}


def test_project_has_no_publish_trigger():
    with pytest.raises(InvalidStateError):
        plan_transition(Kind.PROJECT, make_record(ProjectStatus.APPROVED), Trigger.PUBLISH)


# ============================================
# plan_transition: articles
# ============================================


@pytest.mark.parametrize("status", list(ArticleStatus))
def test_article_publish_from_any_status(status):
    changes = plan_transition(Kind.ARTICLE, make_record(status), Trigger.PUBLISH, now=NOW)
    assert changes == {"status": "PUBLISHED", "published_at": NOW}


def test_article_schedule_requires_publish_date():
    with pytest.raises(ValidationError) as exc_info:
        plan_transition(Kind.ARTICLE, make_record(ArticleStatus.DRAFT), Trigger.SCHEDULE)

    assert exc_info.value.errors == {"publish_at": "required"}


def test_article_schedule_stores_publish_date():
    publish_at = NOW + timedelta(days=2)
    changes = plan_transition(
        Kind.ARTICLE,
        make_record(ArticleStatus.DRAFT),
        Trigger.SCHEDULE,
        TransitionPayload(publish_at=publish_at),
        now=NOW,
    )
    assert changes == {"status": "SCHEDULED", "published_at": publish_at}


def test_article_release_only_from_scheduled():
    changes = plan_transition(Kind.ARTICLE, make_record(ArticleStatus.SCHEDULED), Trigger.RELEASE)
    assert changes == {"status": "PUBLISHED"}

    with pytest.raises(InvalidStateError):
        plan_transition(Kind.ARTICLE, make_record(ArticleStatus.DRAFT), Trigger.RELEASE)


def test_article_unpublish_returns_to_draft():
    changes = plan_transition(Kind.ARTICLE, make_record(ArticleStatus.PUBLISHED), Trigger.UNPUBLISH)
    assert changes == {"status": "DRAFT"}


# ============================================
# plan_transition: startups and internships
# ============================================


def test_startup_advance_to_chosen_status_with_message():
    changes = plan_transition(
        Kind.STARTUP,
        make_record("Submitted"),
        Trigger.ADVANCE,
        TransitionPayload(target_status=" Interview ", notes="See you Monday"),
    )
    assert changes == {"status": "Interview", "mod_notes": "See you Monday"}


def test_startup_advance_without_message_keeps_notes():
    changes = plan_transition(
        Kind.STARTUP,
        make_record("Submitted"),
        Trigger.ADVANCE,
        TransitionPayload(target_status="Approved"),
    )
    assert changes == {"status": "Approved"}


@pytest.mark.parametrize("target", [None, "", "   ", "x" * (MAX_STATUS_LENGTH + 1)])
def test_advance_rejects_bad_target(target):
    with pytest.raises(ValidationError):
        plan_transition(
            Kind.INTERNSHIP,
            make_record("Submitted"),
            Trigger.ADVANCE,
            TransitionPayload(target_status=target),
        )


def test_advance_accepts_status_at_max_length():
    target = "x" * MAX_STATUS_LENGTH
    changes = plan_transition(
        Kind.INTERNSHIP, make_record("Draft"), Trigger.ADVANCE, TransitionPayload(target_status=target)
    )
    assert changes == {"status": target}


def test_startup_submit_from_any_status():
    changes = plan_transition(Kind.STARTUP, make_record("Rejected"), Trigger.SUBMIT)
    assert changes == {"status": "Submitted"}


# ============================================
# transition / apply_transition
# ============================================


@pytest.mark.asyncio
async def test_transition_not_found(make_repository, admin):
    repo = make_repository(Project, "Project")
    repo.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        await transition(repo, Kind.PROJECT, 99, Trigger.APPROVE, admin)

    repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transition_owner_submits(make_repository, owner):
    repo = make_repository(Project, "Project")
    record = make_record(ProjectStatus.PENDING, owner_id=owner.id)
    repo.get_by_id.return_value = record

    result = await transition(repo, Kind.PROJECT, record.id, Trigger.SUBMIT, owner)

    assert result.status == "SUBMITTED"
    assert result.submitted_at is not None
    repo.update.assert_awaited_once()


@pytest.mark.asyncio
async def test_transition_forbidden_leaves_record_untouched(make_repository, other_user):
    repo = make_repository(Project, "Project")
    record = make_record(ProjectStatus.PENDING, owner_id=10)
    repo.get_by_id.return_value = record

    with pytest.raises(ForbiddenError):
        await transition(repo, Kind.PROJECT, record.id, Trigger.SUBMIT, other_user)

    assert record.status == ProjectStatus.PENDING
    assert record.submitted_at is None
    repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transition_invalid_state_leaves_record_untouched(make_repository, owner):
    repo = make_repository(Project, "Project")
    record = make_record(ProjectStatus.APPROVED, owner_id=owner.id)
    repo.get_by_id.return_value = record

    with pytest.raises(InvalidStateError):
        await transition(repo, Kind.PROJECT, record.id, Trigger.SUBMIT, owner)

    assert record.status == ProjectStatus.APPROVED
    repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transition_moderation_refused_for_owner(make_repository, owner):
    repo = make_repository(Project, "Project")
    record = make_record(ProjectStatus.SUBMITTED, owner_id=owner.id)
    repo.get_by_id.return_value = record

    with pytest.raises(ForbiddenError):
        await transition(repo, Kind.PROJECT, record.id, Trigger.APPROVE, owner)

    repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_transition_anonymous_unauthenticated(make_repository):
    repo = make_repository(Project, "Project")
    repo.get_by_id.return_value = make_record(ProjectStatus.PENDING)

    with pytest.raises(UnauthenticatedError):
        await transition(repo, Kind.PROJECT, 7, Trigger.SUBMIT, None)


@pytest.mark.asyncio
async def test_transition_undefined_trigger_checks_moderator_first(make_repository, owner, admin):
    """Test that an undefined trigger is gated as moderation before the state check."""
    repo = make_repository(Project, "Project")
    repo.get_by_id.return_value = make_record(ProjectStatus.PENDING, owner_id=owner.id)

    with pytest.raises(ForbiddenError):
        await transition(repo, Kind.PROJECT, 7, Trigger.PUBLISH, owner)

    with pytest.raises(InvalidStateError):
        await transition(repo, Kind.PROJECT, 7, Trigger.PUBLISH, admin)


@pytest.mark.asyncio
async def test_apply_transition_merges_extra_changes(make_repository, admin):
    """Test that field edits travel in the same update and cannot override the status."""
    repo = make_repository(Project, "Project")
    record = make_record(ProjectStatus.SUBMITTED)

    await apply_transition(
        repo,
        Kind.PROJECT,
        record,
        Trigger.FEATURE,
        admin,
        extra_changes={"title": "New title", "status": "PENDING"},
    )

    repo.update.assert_awaited_once()
    _, changes = repo.update.await_args.args
    assert changes["title"] == "New title"
    assert changes["status"] == "FEATURED"
    assert changes["featured_at"] is not None
