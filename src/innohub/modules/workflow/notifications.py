"""
Owner notifications for moderation decisions.

Email failures are logged and never fail the moderation request.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from innohub.core.email import send_status_changed
from innohub.modules.users.repository import UserRepository
from innohub.modules.workflow.kinds import Kind
from innohub.modules.workflow.statuses import status_value

logger = logging.getLogger(__name__)


async def notify_owner(
    db: AsyncSession,
    kind: Kind,
    record: Any,
    title: str,
    path: str,
    notes: str | None = None,
) -> bool:
    """
    Email the record's owner about its new status.

    Returns:
        True if the email was sent (or logged), False otherwise
    """
    try:
        owner = await UserRepository.get_by_id(db, record.owner_id)
        if owner is None:
            logger.warning(f"Owner {record.owner_id} of {kind.value} {record.id} not found")
            return False

        return await send_status_changed(
            to_email=owner.email,
            owner_name=owner.display_name,
            kind_label=kind.label,
            title=title,
            new_status=status_value(record.status),
            path=path,
            notes=notes,
        )
    except Exception as e:
        logger.error(f"Failed to notify owner of {kind.value} {record.id}: {e}", exc_info=True)
        return False
