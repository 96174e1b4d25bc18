"""
Report router - read access to stored reports.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.report import ReportRead
from app.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=List[ReportRead])
async def list_reports(
    assessment_id: int = Query(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the reports of an assessment, newest first."""
    service = ReportService(db)
    return await service.list_reports(current_user.id, assessment_id)


@router.get("/{report_id}", response_model=ReportRead)
async def get_report(
    report_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a report by ID."""
    service = ReportService(db)
    return await service.get_report(current_user.id, report_id)
