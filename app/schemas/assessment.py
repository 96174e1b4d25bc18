"""
Assessment Pydantic schemas.
"""

from typing import Literal, Optional
from datetime import datetime

from pydantic import BaseModel, Field, PositiveInt, field_validator

from app.schemas.base import TimestampedRead


class AssessmentCreate(BaseModel):
    """Schema for starting a new assessment."""

    client_id: PositiveInt
    assessment_type_id: PositiveInt
    title: str = Field(min_length=1, max_length=255)


class AssessmentUpdate(BaseModel):
    """Schema for updating an assessment. All fields optional."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    status: Optional[Literal["in_progress", "completed"]] = None
    completed_at: Optional[datetime] = None
    total_score: Optional[float] = None

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("cannot be null")
        return value


class AssessmentRead(TimestampedRead):
    """Schema for reading assessment data (API response)."""

    client_id: int
    assessment_type_id: int
    user_id: int
    title: str
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_score: Optional[float] = None


class AssessmentProgress(BaseModel):
    """
    Answered-question progress of an assessment.

    progress is None when the assessment type has no questions.
    """

    total_questions: int
    answered_questions: int
    progress: Optional[float] = None
    meets_completion_threshold: bool


class CompletionResult(BaseModel):
    """Response for completing an assessment."""

    success: bool = True
    total_score: float
