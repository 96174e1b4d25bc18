"""
Report model.

Represents a previously generated report file for an assessment.
"""

from typing import Optional

from sqlalchemy import Text, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import IdModel


class Report(IdModel):
    """
    Report table - a stored report artifact plus its analysis summary.
    """

    __tablename__ = "report"

    assessment_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    # Storage location of the generated file
    file_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    file_key: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    file_size: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    analysis_summary: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    action_items: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
