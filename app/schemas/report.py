"""
Report Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel

from app.schemas.base import RecordRead


class ReportCreate(BaseModel):
    """Schema for recording a generated report."""

    assessment_id: int
    file_url: str
    file_key: str
    file_size: Optional[int] = None
    analysis_summary: Optional[str] = None
    action_items: Optional[str] = None


class ReportRead(RecordRead):
    """Schema for reading a report."""

    assessment_id: int
    file_url: str
    file_key: str
    file_size: Optional[int] = None
    analysis_summary: Optional[str] = None
    action_items: Optional[str] = None
