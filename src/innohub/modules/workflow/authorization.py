"""
Authorization Gate

Decides whether an actor may perform an action on a submission record.

Rules, evaluated in order:

1. READ of a record in the kind's public status set is allowed for anyone,
   including anonymous callers.
2. READ of a non-public record is allowed for the owner or a reader role of
   the kind.
3. UPDATE, DELETE, SUBMIT, PUBLISH and ADD_MEDIA are allowed for the owner
   or an ADMIN. When the kind restricts editable statuses (projects), the
   owner may only UPDATE while the record is in one of them.
4. MODERATE is allowed for the kind's moderator roles only.

Refusals have no side effects: callers check before writing.
"""

import logging
from enum import Enum
from typing import Any

from innohub.core.auth import Actor
from innohub.core.exceptions import ForbiddenError, NotFoundError, UnauthenticatedError
from innohub.modules.users.models import UserRole
from innohub.modules.workflow.kinds import Kind, policy_for
from innohub.modules.workflow.statuses import status_value

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    SUBMIT = "submit"
    PUBLISH = "publish"
    ADD_MEDIA = "add_media"
    MODERATE = "moderate"


_OWNER_ACTIONS = {Action.UPDATE, Action.DELETE, Action.SUBMIT, Action.PUBLISH, Action.ADD_MEDIA}


def is_owner(actor: Actor | None, record: Any) -> bool:
    return actor is not None and record.owner_id == actor.id


def authorize(actor: Actor | None, record: Any, action: Action, kind: Kind) -> bool:
    """Return True if ``actor`` may perform ``action`` on ``record``."""
    policy = policy_for(kind)
    status = status_value(record.status)

    if action is Action.READ:
        if status in policy.public_statuses:
            return True
        if actor is None:
            return False
        return is_owner(actor, record) or actor.role in policy.reader_roles

    if actor is None:
        return False

    if action is Action.MODERATE:
        return actor.role in policy.moderator_roles

    if action in _OWNER_ACTIONS:
        if actor.role == UserRole.ADMIN.value:
            return True
        if not is_owner(actor, record):
            return False
        if action is Action.UPDATE and policy.editable_statuses is not None:
            return status in policy.editable_statuses
        return True

    return False


def ensure_authorized(actor: Actor | None, record: Any, action: Action, kind: Kind) -> None:
    """
    Raise unless ``actor`` may perform ``action`` on ``record``.

    Raises:
        UnauthenticatedError: If an anonymous caller attempts a non-public action
        ForbiddenError: If an authenticated caller is refused
    """
    if authorize(actor, record, action, kind):
        return

    if actor is None:
        raise UnauthenticatedError()

    logger.warning(
        f"Refused {action.value} on {kind.value} {record.id} for user {actor.id} ({actor.role})"
    )
    if action is Action.UPDATE and is_owner(actor, record):
        raise ForbiddenError(
            f"This {kind.label} can no longer be edited in status {status_value(record.status)}."
        )
    raise ForbiddenError()


def ensure_readable(actor: Actor | None, record: Any, kind: Kind, identifier: Any) -> None:
    """
    Raise ``NotFoundError`` unless ``actor`` may read ``record``.

    A refused read is reported as a missing record so the existence of
    non-public records is not disclosed.
    """
    if record is None or not authorize(actor, record, Action.READ, kind):
        raise NotFoundError(kind.label.capitalize(), identifier)
