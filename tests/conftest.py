"""
Shared fixtures: actors, a mock database session, and mock repositories.

Repository mocks apply ``update`` changes to the record they are given so
tests can assert on the record's fields after a service call.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from innohub.core.auth import Actor

ADMIN_ID = 1
REVIEWER_ID = 2
OWNER_ID = 10
OTHER_ID = 20


@pytest.fixture
def admin():
    return Actor(id=ADMIN_ID, email="admin@test.com", role="ADMIN", name="Admin")


@pytest.fixture
def reviewer():
    return Actor(id=REVIEWER_ID, email="reviewer@test.com", role="REVIEWER", name="Reviewer")


@pytest.fixture
def owner():
    return Actor(id=OWNER_ID, email="owner@test.com", role="USER", name="Owner")


@pytest.fixture
def other_user():
    return Actor(id=OTHER_ID, email="other@test.com", role="MEMBER", name="Other")


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.flush = AsyncMock()
    db.delete = AsyncMock()
    db.add = MagicMock()
    return db


def _apply_changes(record: Any, changes: dict[str, Any]) -> Any:
    for key, value in changes.items():
        setattr(record, key, value)
    return record


def _assign_id(record: Any) -> Any:
    if getattr(record, "id", None) is None:
        record.id = 1
    return record


@pytest.fixture
def make_repository(mock_db):
    """Build a mock ``SubmissionRepository`` for a model."""

    def _make(model: type, resource_name: str = "Record") -> MagicMock:
        repo = MagicMock()
        repo.db = mock_db
        repo.model = model
        repo.resource_name = resource_name
        repo.get_by_id = AsyncMock(return_value=None)
        repo.get_by_slug = AsyncMock(return_value=None)
        repo.slug_exists = AsyncMock(return_value=False)
        repo.create = AsyncMock(side_effect=_assign_id)
        repo.update = AsyncMock(side_effect=_apply_changes)
        repo.delete = AsyncMock()
        repo.find = AsyncMock(return_value=[])
        repo.count = AsyncMock(return_value=0)
        repo.update_many = AsyncMock(return_value=0)
        return repo

    return _make
