"""
Assessment repository - database operations for Assessment.

Every query is scoped to the owning user.
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from app.models.assessment import Assessment
from app.schemas.assessment import AssessmentCreate, AssessmentUpdate


class AssessmentRepository:
    """Repository for Assessment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, user_id: int, client_id: Optional[int] = None) -> List[Assessment]:
        """List a user's assessments, newest first."""
        query = select(Assessment).where(Assessment.user_id == user_id)

        if client_id is not None:
            query = query.where(Assessment.client_id == client_id)

        query = query.order_by(Assessment.created_at.desc(), Assessment.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int, assessment_id: int) -> Optional[Assessment]:
        """Get an assessment by ID for a specific user."""
        result = await self.db.execute(
            select(Assessment).where(
                Assessment.id == assessment_id,
                Assessment.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: int, data: AssessmentCreate) -> Assessment:
        """Create a new assessment in the in_progress state."""
        assessment = Assessment(
            user_id=user_id,
            **data.model_dump()
        )
        self.db.add(assessment)
        await self.db.flush()
        await self.db.refresh(assessment)
        return assessment

    async def update(
        self,
        user_id: int,
        assessment_id: int,
        data: AssessmentUpdate
    ) -> Optional[Assessment]:
        """Update an assessment."""
        assessment = await self.get_by_id(user_id, assessment_id)
        if not assessment:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(assessment, field, value)

        assessment.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(assessment)
        return assessment

    async def delete(self, user_id: int, assessment_id: int) -> bool:
        """Delete an assessment. Returns False when the user has no such assessment."""
        result = await self.db.execute(
            delete(Assessment).where(
                Assessment.id == assessment_id,
                Assessment.user_id == user_id
            )
        )
        await self.db.flush()
        return result.rowcount > 0
