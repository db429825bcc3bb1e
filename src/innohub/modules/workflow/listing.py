"""
Listing/Filter Service

Filtered, paginated views over a submission repository.

Predicates are AND-composed. Public views are always restricted to the
kind's public statuses; a status filter is honoured there only when it names
a public status. Admin views may filter by any status. Every ordering ends
with ``id ASC`` so pages are deterministic.
"""

import logging
import math
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import ColumnElement

from innohub.core.auth import Actor
from innohub.core.exceptions import ForbiddenError
from innohub.modules.workflow.kinds import Kind, policy_for
from innohub.modules.workflow.repository import SubmissionRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

ItemT = TypeVar("ItemT")


class Pagination(BaseModel):
    """1-indexed page request."""

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class Page(BaseModel, Generic[ItemT]):
    """Listing envelope: ``{data: [...], meta: {total, page, limit, pages}}``."""

    model_config = ConfigDict(from_attributes=True)

    data: list[ItemT]
    meta: PageMeta


def build_meta(total: int, pagination: Pagination) -> PageMeta:
    return PageMeta(
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        pages=math.ceil(total / pagination.limit),
    )


def status_predicates(
    repository: SubmissionRepository,
    kind: Kind,
    status: str | None,
    admin_view: bool,
) -> list[ColumnElement[bool]]:
    """
    Build the status restriction for a listing.

    Admin views filter by ``status`` if given. Public views always restrict to
    the public set and ignore a requested status outside it.
    """
    column = repository.model.status

    if admin_view:
        return [column == status] if status else []

    public = policy_for(kind).public_statuses
    if status and status in public:
        return [column == status]
    return [column.in_(sorted(public))]


async def list_submissions(
    repository: SubmissionRepository,
    kind: Kind,
    filters: Sequence[ColumnElement[bool]],
    pagination: Pagination,
    order_by: Sequence[Any],
    *,
    status: str | None = None,
    actor: Actor | None = None,
    admin_view: bool = False,
    options: Sequence[Any] = (),
) -> tuple[list[Any], PageMeta]:
    """
    List records of ``kind`` matching ``filters``.

    Args:
        repository: Repository for the kind
        kind: Record kind
        filters: Kind-specific predicates, AND-composed
        pagination: Page request
        order_by: Kind-specific ordering; ``id ASC`` is appended
        status: Requested status filter
        actor: Caller identity; required for admin views
        admin_view: Whether non-public statuses may be listed
        options: Loader options for related rows

    Returns:
        Tuple of (records on the page, page metadata)

    Raises:
        ForbiddenError: If an admin view is requested by a non-reader
    """
    if admin_view and (actor is None or actor.role not in policy_for(kind).reader_roles):
        logger.warning(f"Refused admin listing of {kind.value} for {actor}")
        raise ForbiddenError()

    where = [*filters, *status_predicates(repository, kind, status, admin_view)]

    total = await repository.count(where)
    records = await repository.find(
        where=where,
        order_by=[*order_by, repository.model.id.asc()],
        skip=pagination.skip,
        limit=pagination.limit,
        options=options,
    )

    return records, build_meta(total, pagination)
