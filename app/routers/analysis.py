"""
Analysis router - computed scores and generated insights.
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.analysis import AssessmentInsights, CriterionScoreRead
from app.services.analysis_service import AnalysisService
from app.services.llm_client import LLMClient

router = APIRouter(prefix="/analysis", tags=["analysis"])


def get_llm_client() -> LLMClient:
    """Dependency returning the LLM client (overridden in tests)."""
    return LLMClient()


@router.get("/{assessment_id}/scores", response_model=List[CriterionScoreRead])
async def get_scores(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Stored per-criterion scores of an assessment."""
    service = AnalysisService(db)
    return await service.get_scores(current_user.id, assessment_id)


@router.post("/{assessment_id}/insights", response_model=AssessmentInsights)
async def generate_insights(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    llm_client: LLMClient = Depends(get_llm_client),
):
    """Generate narrative insights for an assessment. Nothing is stored."""
    service = AnalysisService(db, llm_client=llm_client)
    return await service.generate_insights(current_user.id, assessment_id)
