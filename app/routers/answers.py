"""
Answer router - save and read questionnaire answers.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.answer import AnswerBatchSave, AnswerRead, AnswerSave
from app.schemas.base import SuccessResponse
from app.services.answer_service import AnswerService

router = APIRouter(prefix="/answers", tags=["answers"])


@router.get("", response_model=List[AnswerRead])
async def list_answers(
    assessment_id: int = Query(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the answers of an assessment."""
    service = AnswerService(db)
    return await service.list_answers(current_user.id, assessment_id)


@router.post("", response_model=SuccessResponse)
async def save_answer(
    data: AnswerSave,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save or overwrite one answer."""
    service = AnswerService(db)
    await service.save_answer(current_user.id, data)
    await db.commit()
    return SuccessResponse()


@router.post("/batch", response_model=SuccessResponse)
async def batch_save_answers(
    data: AnswerBatchSave,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save several answers of one assessment."""
    service = AnswerService(db)
    await service.batch_save_answers(current_user.id, data)
    await db.commit()
    return SuccessResponse()
