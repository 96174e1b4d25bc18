"""
Answer repository - database operations for Answer.

Callers check assessment ownership before using this repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from app.db.upsert import dialect_insert
from app.models.assessment import Answer


class AnswerRepository:
    """Repository for Answer database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_assessment(self, assessment_id: int) -> List[Answer]:
        """List all answers recorded for an assessment."""
        result = await self.db.execute(
            select(Answer)
            .where(Answer.assessment_id == assessment_id)
            .order_by(Answer.question_id.asc())
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        assessment_id: int,
        question_id: int,
        score: Optional[int],
        notes: Optional[str] = None,
    ) -> Answer:
        """
        Save or overwrite the answer for an (assessment, question) pair.

        A single INSERT ... ON CONFLICT statement; an existing row gets its
        score, notes and updated_at replaced, so the last write wins.
        """
        base_insert = dialect_insert(self.db, Answer).values(
            assessment_id=assessment_id,
            question_id=question_id,
            score=score,
            notes=notes,
        )
        stmt = base_insert.on_conflict_do_update(
            index_elements=[Answer.assessment_id, Answer.question_id],
            set_={
                "score": base_insert.excluded.score,
                "notes": base_insert.excluded.notes,
                "updated_at": func.now(),
            },
        ).returning(Answer)
        result = await self.db.execute(stmt, execution_options={"populate_existing": True})
        answer = result.scalar_one()
        await self.db.flush()
        return answer
