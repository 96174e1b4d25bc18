"""
Assessment, Answer and CriterionScore models.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, Integer, Float, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.models.base_model import IdModel, TimestampedModel


class AssessmentStatus:
    """Assessment status values. Transitions only go forward."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    ALL = [IN_PROGRESS, COMPLETED]


class Assessment(TimestampedModel):
    """
    Assessment table - one run of an assessment type for a client.
    """

    __tablename__ = "assessment"

    client_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    assessment_type_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    # Owning user
    user_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssessmentStatus.IN_PROGRESS,
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Mean of the criterion averages, set on completion
    total_score: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
    )


class Answer(TimestampedModel):
    """
    Answer table - the recorded score for one question of one assessment.

    score is 1-5, or NULL when the question was skipped.
    """

    __tablename__ = "answer"

    assessment_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    question_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    score: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("assessment_id", "question_id", name="uq_answer_assessment_question"),
    )


class CriterionScore(IdModel):
    """
    CriterionScore table - cached per-criterion aggregate of an assessment.

    Rewritten wholesale every time the assessment is completed.
    """

    __tablename__ = "criterion_score"

    assessment_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
    )

    criterion_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    criterion_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    average_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    total_questions: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    answered_questions: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("assessment_id", "criterion_number", name="uq_criterion_score_assessment_criterion"),
    )
