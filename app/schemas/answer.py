"""
Answer Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, PositiveInt

from app.schemas.base import TimestampedRead


class AnswerInput(BaseModel):
    """One answer inside a batch save."""

    question_id: PositiveInt
    score: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None


class AnswerSave(AnswerInput):
    """Schema for saving a single answer."""

    assessment_id: PositiveInt


class AnswerBatchSave(BaseModel):
    """Schema for saving many answers of one assessment."""

    assessment_id: PositiveInt
    answers: List[AnswerInput]


class AnswerRead(TimestampedRead):
    """Schema for reading an answer."""

    assessment_id: int
    question_id: int
    score: Optional[int] = None
    notes: Optional[str] = None
