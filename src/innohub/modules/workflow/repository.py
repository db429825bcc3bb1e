"""
Submission Repository

Generic data access for the submission kinds (articles, projects, startups,
internship applications). A repository is constructed per request with the
request's session and the kind's model, and passed into services.

- Single responsibility: only database operations, no business logic
- Every write is one commit; status and timestamp changes travel together
- The unique slug index is the authoritative duplicate check; a violation
  raised by the store is reported as ``DuplicateSlugError``
"""

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from innohub.core.exceptions import DuplicateSlugError
from innohub.modules.shared import TimestampedModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=TimestampedModel)


def update_changes(
    model: type[TimestampedModel],
    data: BaseModel,
    exclude: set[str] | None = None,
) -> dict[str, Any]:
    """
    Collect the fields a PATCH body sets.

    An explicit null on a NOT NULL column means "no change" and is dropped;
    on a nullable column it clears the value.
    """
    columns = model.__table__.columns
    return {
        key: value
        for key, value in data.model_dump(exclude_unset=True, exclude=exclude).items()
        if value is not None or (key in columns and columns[key].nullable)
    }


class SubmissionRepository(Generic[ModelT]):
    """Repository for one submission kind."""

    def __init__(self, db: AsyncSession, model: type[ModelT], resource_name: str):
        self.db = db
        self.model = model
        self.resource_name = resource_name

    async def get_by_id(self, record_id: int) -> ModelT | None:
        """Get a record by ID."""
        return await self.db.get(self.model, record_id)

    async def get_by_slug(self, slug: str) -> ModelT | None:
        """Get a record by its slug."""
        result = await self.db.execute(select(self.model).where(self.model.slug == slug))
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        """
        Check whether another record of this kind holds ``slug``.

        Args:
            slug: Candidate slug
            exclude_id: Record to ignore (the record being updated)
        """
        query = select(self.model.id).where(self.model.slug == slug)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, record: ModelT) -> ModelT:
        """Insert a new record."""
        self.db.add(record)
        await self._commit(getattr(record, "slug", None))
        await self.db.refresh(record)

        logger.info(f"Created {self.resource_name}: {record.id}")
        return record

    async def update(self, record: ModelT, changes: dict[str, Any]) -> ModelT:
        """
        Apply ``changes`` to ``record`` and persist them in one commit.

        Unknown field names are ignored.
        """
        for key, value in changes.items():
            if hasattr(record, key):
                setattr(record, key, value)

        await self._commit(changes.get("slug"))
        await self.db.refresh(record)
        return record

    async def delete(self, record: ModelT) -> None:
        """Hard-delete a record."""
        await self.db.delete(record)
        await self._commit(None)
        logger.info(f"Deleted {self.resource_name}: {record.id}")

    async def find(
        self,
        where: Sequence[ColumnElement[bool]] = (),
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int | None = None,
        options: Sequence[ORMOption] = (),
    ) -> list[ModelT]:
        """Select records matching every predicate in ``where``."""
        query = select(self.model).where(*where).order_by(*order_by).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        if options:
            query = query.options(*options)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, where: Sequence[ColumnElement[bool]] = ()) -> int:
        """Count records matching every predicate in ``where``."""
        query = select(func.count()).select_from(self.model).where(*where)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def update_many(self, record_ids: Sequence[int], changes: dict[str, Any]) -> int:
        """
        Apply the same ``changes`` to several records in one statement.

        Returns:
            Number of rows updated
        """
        if not record_ids:
            return 0

        result = await self.db.execute(
            update(self.model).where(self.model.id.in_(record_ids)).values(**changes)
        )
        await self._commit(None)
        return result.rowcount or 0

    async def _commit(self, slug: str | None) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            if isinstance(e, IntegrityError) and slug is not None and "slug" in str(e.orig):
                logger.info(f"Duplicate {self.resource_name} slug rejected by store: {slug}")
                raise DuplicateSlugError(self.resource_name, slug) from e
            raise
