"""
Assessment type router - shared questionnaire templates.
"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.errors import NotFoundError
from app.repositories.assessment_type_repository import AssessmentTypeRepository
from app.schemas.assessment_type import AssessmentTypeRead, QuestionRead

router = APIRouter(
    prefix="/assessment-types",
    tags=["assessment-types"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[AssessmentTypeRead])
async def list_assessment_types(db: AsyncSession = Depends(get_db)):
    """List all assessment types."""
    return await AssessmentTypeRepository(db).list()


@router.get("/{assessment_type_id}", response_model=AssessmentTypeRead)
async def get_assessment_type(
    assessment_type_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """Get an assessment type by ID."""
    assessment_type = await AssessmentTypeRepository(db).get_by_id(assessment_type_id)
    if not assessment_type:
        raise NotFoundError("Assessment type not found")
    return assessment_type


@router.get("/{assessment_type_id}/questions", response_model=List[QuestionRead])
async def get_questions(
    assessment_type_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """List the questions of an assessment type in criterion order."""
    return await AssessmentTypeRepository(db).list_questions(assessment_type_id)
