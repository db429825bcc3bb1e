"""
Status Workflow Engine

One declarative table of transition rules, consulted by a single generic
``transition`` function for every submission kind.

A rule names the statuses a trigger may fire from (``None`` means any
status), the status it moves to (``None`` means the caller supplies the
target), the action the authorization gate must allow, and the field
effects written together with the status.

Order of checks: record exists, actor is authorized, trigger is allowed from
the current status, payload is complete. Only then is a single repository
update issued, so a refused transition never leaves partial changes.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from innohub.core.auth import Actor
from innohub.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from innohub.modules.workflow.authorization import Action, ensure_authorized
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.repository import SubmissionRepository
from innohub.modules.workflow.statuses import (
    ArticleStatus,
    InternshipStatus,
    ProjectStatus,
    StartupStatus,
    status_value,
)

logger = logging.getLogger(__name__)

MAX_STATUS_LENGTH = 50


class Trigger(str, Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    FEATURE = "feature"
    REJECT = "reject"
    REQUEST_CHANGES = "request-changes"
    PUBLISH = "publish"
    SCHEDULE = "schedule"
    UNPUBLISH = "unpublish"
    RELEASE = "release"
    ADVANCE = "advance"


class Effect(str, Enum):
    """Where a field's new value comes from when a rule fires."""

    NOW = "now"
    CLEAR = "clear"
    PUBLISH_AT = "publish_at"
    NOTES = "notes"


@dataclass(frozen=True)
class TransitionPayload:
    """
    Caller-supplied inputs to a transition.

    Attributes:
        notes: Moderator feedback (reject, request-changes, advance)
        publish_at: Scheduled publication time (schedule)
        target_status: Status chosen by a reviewer (advance)
    """

    notes: str | None = None
    publish_at: datetime | None = None
    target_status: str | None = None


@dataclass(frozen=True)
class TransitionRule:
    kind: Kind
    trigger: Trigger
    from_states: frozenset[str] | None
    to_state: str | None
    action: Action
    effects: tuple[tuple[str, Effect], ...] = field(default_factory=tuple)
    notes_required: bool = False


def _rule(
    kind: Kind,
    trigger: Trigger,
    to_state: Enum | None,
    action: Action,
    from_states: set[Enum] | None = None,
    effects: tuple[tuple[str, Effect], ...] = (),
    notes_required: bool = False,
) -> TransitionRule:
    return TransitionRule(
        kind=kind,
        trigger=trigger,
        from_states=frozenset(s.value for s in from_states) if from_states else None,
        to_state=status_value(to_state),
        action=action,
        effects=effects,
        notes_required=notes_required,
    )


TRANSITIONS: dict[tuple[Kind, Trigger], TransitionRule] = {
    (rule.kind, rule.trigger): rule
    for rule in [
        # Articles: publishing is not gated on the current status
        _rule(
            Kind.ARTICLE,
            Trigger.PUBLISH,
            ArticleStatus.PUBLISHED,
            Action.PUBLISH,
            effects=(("published_at", Effect.NOW),),
        ),
        _rule(
            Kind.ARTICLE,
            Trigger.SCHEDULE,
            ArticleStatus.SCHEDULED,
            Action.PUBLISH,
            effects=(("published_at", Effect.PUBLISH_AT),),
        ),
        _rule(Kind.ARTICLE, Trigger.UNPUBLISH, ArticleStatus.DRAFT, Action.PUBLISH),
        _rule(
            Kind.ARTICLE,
            Trigger.RELEASE,
            ArticleStatus.PUBLISHED,
            Action.MODERATE,
            from_states={ArticleStatus.SCHEDULED},
        ),
        # Projects
        _rule(
            Kind.PROJECT,
            Trigger.SUBMIT,
            ProjectStatus.SUBMITTED,
            Action.SUBMIT,
            from_states={ProjectStatus.PENDING, ProjectStatus.CHANGES_REQUESTED},
            effects=(("submitted_at", Effect.NOW),),
        ),
        _rule(
            Kind.PROJECT,
            Trigger.APPROVE,
            ProjectStatus.APPROVED,
            Action.MODERATE,
            effects=(("featured_at", Effect.CLEAR),),
        ),
        _rule(
            Kind.PROJECT,
            Trigger.FEATURE,
            ProjectStatus.FEATURED,
            Action.MODERATE,
            effects=(("featured_at", Effect.NOW),),
        ),
        _rule(
            Kind.PROJECT,
            Trigger.REJECT,
            ProjectStatus.REJECTED,
            Action.MODERATE,
            effects=(("mod_notes", Effect.NOTES),),
            notes_required=True,
        ),
        _rule(
            Kind.PROJECT,
            Trigger.REQUEST_CHANGES,
            ProjectStatus.CHANGES_REQUESTED,
            Action.MODERATE,
            effects=(("mod_notes", Effect.NOTES),),
            notes_required=True,
        ),
        # Startups: reviewers choose the target status
        _rule(Kind.STARTUP, Trigger.SUBMIT, StartupStatus.SUBMITTED, Action.SUBMIT),
        _rule(
            Kind.STARTUP,
            Trigger.ADVANCE,
            None,
            Action.MODERATE,
            effects=(("mod_notes", Effect.NOTES),),
        ),
        # Internship applications
        _rule(Kind.INTERNSHIP, Trigger.SUBMIT, InternshipStatus.SUBMITTED, Action.SUBMIT),
        _rule(Kind.INTERNSHIP, Trigger.ADVANCE, None, Action.MODERATE),
    ]
}


def get_rule(kind: Kind, trigger: Trigger) -> TransitionRule | None:
    return TRANSITIONS.get((kind, trigger))


def _target_status(rule: TransitionRule, payload: TransitionPayload) -> str:
    if rule.to_state is not None:
        return rule.to_state

    target = (payload.target_status or "").strip()
    if not target:
        raise ValidationError("A target status is required.", errors={"to": "required"})
    if len(target) > MAX_STATUS_LENGTH:
        raise ValidationError(
            f"Status must be at most {MAX_STATUS_LENGTH} characters.",
            errors={"to": target},
        )
    return target


def _effect_value(effect: Effect, payload: TransitionPayload, now: datetime) -> Any:
    if effect is Effect.NOW:
        return now
    if effect is Effect.PUBLISH_AT:
        return payload.publish_at
    if effect is Effect.NOTES:
        return payload.notes
    return None


def plan_transition(
    kind: Kind,
    record: Any,
    trigger: Trigger,
    payload: TransitionPayload | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Compute the field changes a transition would write, without writing them.

    Args:
        kind: Record kind
        record: Current record
        trigger: Trigger to apply
        payload: Caller-supplied inputs
        now: Transition time (defaults to the current UTC time)

    Returns:
        Dict of field name to new value, always including ``status``

    Raises:
        InvalidStateError: If the trigger is not defined for the kind or not
            allowed from the record's current status
        ValidationError: If the payload lacks a required value
    """
    payload = payload or TransitionPayload()
    now = now or datetime.now(UTC)
    current = status_value(record.status)

    rule = get_rule(kind, trigger)
    if rule is None:
        raise InvalidStateError(current, trigger.value)

    if rule.from_states is not None and current not in rule.from_states:
        raise InvalidStateError(current, trigger.value, sorted(rule.from_states))

    if rule.notes_required and not (payload.notes or "").strip():
        raise ValidationError(
            "A message for the owner is required.", errors={"notes": "required"}
        )
    if any(effect is Effect.PUBLISH_AT for _, effect in rule.effects) and payload.publish_at is None:
        raise ValidationError(
            "A publish date is required to schedule.", errors={"publish_at": "required"}
        )

    changes: dict[str, Any] = {"status": _target_status(rule, payload)}
    for field_name, effect in rule.effects:
        if effect is Effect.NOTES and payload.notes is None:
            continue
        changes[field_name] = _effect_value(effect, payload, now)

    return changes


async def transition(
    repository: SubmissionRepository,
    kind: Kind,
    record_id: int,
    trigger: Trigger,
    actor: Actor | None,
    payload: TransitionPayload | None = None,
    extra_changes: dict[str, Any] | None = None,
) -> Any:
    """
    Load a record, check the actor and the rule, and apply the transition.

    Args:
        repository: Repository for the kind
        kind: Record kind
        record_id: Record to transition
        trigger: Trigger to apply
        actor: Caller identity
        payload: Caller-supplied inputs
        extra_changes: Field changes persisted in the same write as the status

    Returns:
        The updated record

    Raises:
        NotFoundError: If the record does not exist
        ForbiddenError: If the gate refuses the actor
        InvalidStateError: If the trigger is not allowed from the current status
        ValidationError: If the payload lacks a required value
    """
    record = await repository.get_by_id(record_id)
    if record is None:
        raise NotFoundError(kind.label.capitalize(), record_id)

    return await apply_transition(repository, kind, record, trigger, actor, payload, extra_changes)


async def apply_transition(
    repository: SubmissionRepository,
    kind: Kind,
    record: Any,
    trigger: Trigger,
    actor: Actor | None,
    payload: TransitionPayload | None = None,
    extra_changes: dict[str, Any] | None = None,
) -> Any:
    """Apply a transition to an already loaded record. See ``transition``."""
    rule = get_rule(kind, trigger)
    action = rule.action if rule is not None else Action.MODERATE
    ensure_authorized(actor, record, action, kind)

    previous = status_value(record.status)
    changes = plan_transition(kind, record, trigger, payload)
    if extra_changes:
        changes = {**extra_changes, **changes}

    updated = await repository.update(record, changes)

    actor_label = actor.id if actor is not None else "anonymous"
    logger.info(
        f"{kind.value} {record.id}: {trigger.value} {previous} -> {changes['status']} "
        f"by user {actor_label}"
    )
    return updated
