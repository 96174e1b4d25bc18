"""
AssessmentType and Question models.

Reference data shared by all users: a named questionnaire template and
its questions, grouped into numbered criteria.
"""

from typing import Optional

from sqlalchemy import String, Text, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import IdModel


class AssessmentType(IdModel):
    """
    AssessmentType table - a questionnaire template (e.g. "Business Control").

    total_questions is stored alongside the questions and is what progress
    is computed against.
    """

    __tablename__ = "assessment_type"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    total_questions: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )


class Question(IdModel):
    """
    Question table - one scored question of an assessment type.
    """

    __tablename__ = "question"

    assessment_type_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    # Grouping label
    criterion_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    criterion_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    # Position within the criterion
    question_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    question_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
