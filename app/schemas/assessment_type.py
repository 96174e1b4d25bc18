"""
AssessmentType and Question Pydantic schemas.
"""

from typing import Optional

from app.schemas.base import RecordRead


class AssessmentTypeRead(RecordRead):
    """Schema for reading an assessment type."""

    name: str
    description: Optional[str] = None
    total_questions: int


class QuestionRead(RecordRead):
    """Schema for reading a question."""

    assessment_type_id: int
    criterion_number: int
    criterion_name: str
    question_number: int
    question_text: str
