"""
Shared model building blocks.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from innohub.core.database import Base


class TimestampedModel(Base):
    """
    Abstract base for persisted entities.

    Provides an integer primary key and audit timestamps. Ids are assigned
    by the database in insertion order and are used as the final tie-breaker
    in every listing.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


__all__ = ["TimestampedModel"]
