"""
User model for authentication and ownership.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.models.base_model import TimestampedModel


class User(TimestampedModel):
    """
    User table - represents signed-in users.

    Users are identified by the open_id handed over by the identity
    provider. Clients and assessments are owned by a user.
    """

    __tablename__ = "user"

    open_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(320),
        nullable=True,
    )

    login_method: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
    )

    # 'user' or 'admin'
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="user",
    )

    last_signed_in: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
