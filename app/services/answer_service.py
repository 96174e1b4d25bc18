"""
Answer business logic service.

Answers are only reachable through an assessment the caller owns.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.assessment import Answer
from app.repositories.answer_repository import AnswerRepository
from app.repositories.assessment_repository import AssessmentRepository
from app.schemas.answer import AnswerBatchSave, AnswerSave


class AnswerService:
    """Service for answer business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = AnswerRepository(db)
        self.assessment_repository = AssessmentRepository(db)

    async def _verify_ownership(self, user_id: int, assessment_id: int) -> None:
        if not await self.assessment_repository.get_by_id(user_id, assessment_id):
            raise NotFoundError("Assessment not found")

    async def list_answers(self, user_id: int, assessment_id: int) -> List[Answer]:
        """List the answers of an assessment owned by the user."""
        await self._verify_ownership(user_id, assessment_id)
        return await self.repository.list_for_assessment(assessment_id)

    async def save_answer(self, user_id: int, data: AnswerSave) -> Answer:
        """Insert or overwrite one answer."""
        await self._verify_ownership(user_id, data.assessment_id)
        return await self.repository.upsert(
            assessment_id=data.assessment_id,
            question_id=data.question_id,
            score=data.score,
            notes=data.notes,
        )

    async def batch_save_answers(self, user_id: int, data: AnswerBatchSave) -> int:
        """Upsert answers one by one. Returns how many were written."""
        await self._verify_ownership(user_id, data.assessment_id)
        for item in data.answers:
            await self.repository.upsert(
                assessment_id=data.assessment_id,
                question_id=item.question_id,
                score=item.score,
                notes=item.notes,
            )
        return len(data.answers)
