"""
Client model.

Represents a business being assessed.
"""

from typing import Optional

from sqlalchemy import String, Text, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import TimestampedModel


class Client(TimestampedModel):
    """
    Client table - a company registered by a user.

    Each client belongs to exactly one user.
    """

    __tablename__ = "client"

    # Owning user. Plain reference column; ownership is checked in queries.
    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    company_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    industry: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    # Contact information
    contact_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    contact_email: Mapped[Optional[str]] = mapped_column(
        String(320),
        nullable=True,
    )

    contact_phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
