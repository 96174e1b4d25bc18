"""
AssessmentType repository - read access to the shared questionnaire templates.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.assessment_type import AssessmentType, Question


class AssessmentTypeRepository:
    """Repository for AssessmentType and Question database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[AssessmentType]:
        """List all assessment types by name."""
        result = await self.db.execute(
            select(AssessmentType).order_by(AssessmentType.name.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, assessment_type_id: int) -> Optional[AssessmentType]:
        """Get an assessment type by ID."""
        result = await self.db.execute(
            select(AssessmentType).where(AssessmentType.id == assessment_type_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[AssessmentType]:
        """Get an assessment type by its unique name."""
        result = await self.db.execute(
            select(AssessmentType).where(AssessmentType.name == name)
        )
        return result.scalar_one_or_none()

    async def list_questions(self, assessment_type_id: int) -> List[Question]:
        """List the questions of a type ordered by criterion, then question number."""
        result = await self.db.execute(
            select(Question)
            .where(Question.assessment_type_id == assessment_type_id)
            .order_by(Question.criterion_number.asc(), Question.question_number.asc())
        )
        return list(result.scalars().all())

    async def create(self, name: str, description: Optional[str], total_questions: int) -> AssessmentType:
        """Create an assessment type (used by seeding)."""
        assessment_type = AssessmentType(
            name=name,
            description=description,
            total_questions=total_questions,
        )
        self.db.add(assessment_type)
        await self.db.flush()
        await self.db.refresh(assessment_type)
        return assessment_type

    async def add_questions(self, questions: List[Question]) -> None:
        """Insert a batch of questions."""
        self.db.add_all(questions)
        await self.db.flush()
