"""
Report repository - database operations for Report.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.report import Report
from app.schemas.report import ReportCreate


class ReportRepository:
    """Repository for Report database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_assessment(self, assessment_id: int) -> List[Report]:
        """List reports of an assessment, newest first."""
        result = await self.db.execute(
            select(Report)
            .where(Report.assessment_id == assessment_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, report_id: int) -> Optional[Report]:
        """Get a report by ID."""
        result = await self.db.execute(
            select(Report).where(Report.id == report_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: ReportCreate) -> Report:
        """Record a generated report."""
        report = Report(**data.model_dump())
        self.db.add(report)
        await self.db.flush()
        await self.db.refresh(report)
        return report
