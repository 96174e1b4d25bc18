"""
Base models with common fields.

Every table gets:
- id (auto-increment integer primary key)
- created_at (when the record was created)

Mutable tables additionally get updated_at.
"""

from datetime import datetime

from sqlalchemy import Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class IdModel(Base):
    """
    Abstract base class with an integer key and a creation timestamp.

    This is not a real table - it's a template that other models inherit from.
    """

    __abstract__ = True  # This means: don't create a table for this class

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class TimestampedModel(IdModel):
    """Abstract base for records that are edited after creation."""

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
