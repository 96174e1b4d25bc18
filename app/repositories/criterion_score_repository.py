"""
CriterionScore repository - database operations for CriterionScore.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.upsert import dialect_insert
from app.models.assessment import CriterionScore


class CriterionScoreRepository:
    """Repository for CriterionScore database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_assessment(self, assessment_id: int) -> List[CriterionScore]:
        """List the stored criterion scores of an assessment in criterion order."""
        result = await self.db.execute(
            select(CriterionScore)
            .where(CriterionScore.assessment_id == assessment_id)
            .order_by(CriterionScore.criterion_number.asc())
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        assessment_id: int,
        criterion_number: int,
        criterion_name: str,
        average_score: float,
        total_questions: int,
        answered_questions: int,
    ) -> CriterionScore:
        """Insert or overwrite the score row for (assessment, criterion)."""
        base_insert = dialect_insert(self.db, CriterionScore).values(
            assessment_id=assessment_id,
            criterion_number=criterion_number,
            criterion_name=criterion_name,
            average_score=average_score,
            total_questions=total_questions,
            answered_questions=answered_questions,
        )
        stmt = base_insert.on_conflict_do_update(
            index_elements=[CriterionScore.assessment_id, CriterionScore.criterion_number],
            set_={
                "average_score": base_insert.excluded.average_score,
                "total_questions": base_insert.excluded.total_questions,
                "answered_questions": base_insert.excluded.answered_questions,
            },
        ).returning(CriterionScore)
        result = await self.db.execute(stmt, execution_options={"populate_existing": True})
        row = result.scalar_one()
        await self.db.flush()
        return row
