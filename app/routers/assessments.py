"""
Assessment router - API endpoints for the caller's assessments.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.assessment import (
    AssessmentCreate,
    AssessmentProgress,
    AssessmentRead,
    AssessmentUpdate,
    CompletionResult,
)
from app.schemas.base import CreatedResponse, SuccessResponse
from app.services.assessment_service import AssessmentService

router = APIRouter(prefix="/assessments", tags=["assessments"])


@router.get("", response_model=List[AssessmentRead])
async def list_assessments(
    client_id: Optional[int] = Query(None, gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the caller's assessments, optionally for one client."""
    service = AssessmentService(db)
    return await service.list_assessments(current_user.id, client_id=client_id)


@router.get("/{assessment_id}", response_model=AssessmentRead)
async def get_assessment(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get an assessment by ID."""
    service = AssessmentService(db)
    return await service.get_assessment(current_user.id, assessment_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(
    data: AssessmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Start a new assessment for one of the caller's clients."""
    service = AssessmentService(db)
    assessment = await service.create_assessment(current_user.id, data)
    await db.commit()
    return CreatedResponse(id=assessment.id)


@router.put("/{assessment_id}", response_model=SuccessResponse)
async def update_assessment(
    data: AssessmentUpdate,
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update an assessment."""
    service = AssessmentService(db)
    await service.update_assessment(current_user.id, assessment_id, data)
    await db.commit()
    return SuccessResponse()


@router.delete("/{assessment_id}", response_model=SuccessResponse)
async def delete_assessment(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an assessment."""
    service = AssessmentService(db)
    await service.delete_assessment(current_user.id, assessment_id)
    await db.commit()
    return SuccessResponse()


@router.get("/{assessment_id}/progress", response_model=AssessmentProgress)
async def get_progress(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Answered-question progress of an assessment."""
    service = AssessmentService(db)
    return await service.get_progress(current_user.id, assessment_id)


@router.post("/{assessment_id}/complete", response_model=CompletionResult)
async def complete_assessment(
    assessment_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Compute criterion scores and the overall score, then mark completed.

    Can be called again to recompute from the current answers.
    """
    service = AssessmentService(db)
    return await service.complete_assessment(current_user.id, assessment_id)
