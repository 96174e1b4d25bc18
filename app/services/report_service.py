"""
Report business logic service.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.report import Report
from app.repositories.assessment_repository import AssessmentRepository
from app.repositories.report_repository import ReportRepository


class ReportService:
    """Read access to stored reports, scoped through the parent assessment."""

    def __init__(self, db: AsyncSession):
        self.repository = ReportRepository(db)
        self.assessment_repository = AssessmentRepository(db)

    async def list_reports(self, user_id: int, assessment_id: int) -> List[Report]:
        if not await self.assessment_repository.get_by_id(user_id, assessment_id):
            raise NotFoundError("Assessment not found")
        return await self.repository.list_for_assessment(assessment_id)

    async def get_report(self, user_id: int, report_id: int) -> Report:
        report = await self.repository.get_by_id(report_id)
        if not report or not await self.assessment_repository.get_by_id(user_id, report.assessment_id):
            raise NotFoundError("Report not found")
        return report
