"""
Assessment business logic service.

Owns the two computed operations: progress and completion (score
aggregation).
"""

import logging
from typing import List, Optional

from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.errors import NotFoundError, raise_app_error
from app.models.assessment import Assessment, AssessmentStatus
from app.models.assessment_type import AssessmentType
from app.repositories.answer_repository import AnswerRepository
from app.repositories.assessment_repository import AssessmentRepository
from app.repositories.assessment_type_repository import AssessmentTypeRepository
from app.repositories.client_repository import ClientRepository
from app.repositories.criterion_score_repository import CriterionScoreRepository
from app.schemas.assessment import (
    AssessmentCreate,
    AssessmentProgress,
    AssessmentUpdate,
    CompletionResult,
)
from app.services.scoring import aggregate_scores, compute_progress, count_answered, meets_threshold
from app.utils.time import utc_now

logger = logging.getLogger(__name__)


class AssessmentService:
    """Service for assessment business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = AssessmentRepository(db)
        self.client_repository = ClientRepository(db)
        self.type_repository = AssessmentTypeRepository(db)
        self.answer_repository = AnswerRepository(db)
        self.score_repository = CriterionScoreRepository(db)

    async def list_assessments(self, user_id: int, client_id: Optional[int] = None) -> List[Assessment]:
        """List the user's assessments."""
        return await self.repository.list(user_id, client_id=client_id)

    async def get_assessment(self, user_id: int, assessment_id: int) -> Assessment:
        """
        Get an assessment owned by the user.

        Raises NotFoundError both when it does not exist and when another
        user owns it.
        """
        assessment = await self.repository.get_by_id(user_id, assessment_id)
        if not assessment:
            raise NotFoundError("Assessment not found")
        return assessment

    async def get_assessment_type(self, assessment: Assessment) -> AssessmentType:
        assessment_type = await self.type_repository.get_by_id(assessment.assessment_type_id)
        if not assessment_type:
            raise NotFoundError("Assessment type not found")
        return assessment_type

    async def create_assessment(self, user_id: int, data: AssessmentCreate) -> Assessment:
        """Start an assessment of one of the user's clients."""
        if not await self.client_repository.get_by_id(user_id, data.client_id):
            raise NotFoundError("Client not found")
        if not await self.type_repository.get_by_id(data.assessment_type_id):
            raise NotFoundError("Assessment type not found")
        return await self.repository.create(user_id, data)

    async def update_assessment(self, user_id: int, assessment_id: int, data: AssessmentUpdate) -> Assessment:
        """Update an assessment owned by the user."""
        assessment = await self.repository.update(user_id, assessment_id, data)
        if not assessment:
            raise NotFoundError("Assessment not found")
        return assessment

    async def delete_assessment(self, user_id: int, assessment_id: int) -> None:
        """Delete an assessment owned by the user."""
        if not await self.repository.delete(user_id, assessment_id):
            raise NotFoundError("Assessment not found")

    async def get_progress(self, user_id: int, assessment_id: int) -> AssessmentProgress:
        """
        Count answered questions against the type's stored question total.
        """
        assessment = await self.get_assessment(user_id, assessment_id)
        assessment_type = await self.get_assessment_type(assessment)

        answers = await self.answer_repository.list_for_assessment(assessment.id)
        answered = count_answered(answers)
        total = assessment_type.total_questions

        return AssessmentProgress(
            total_questions=total,
            answered_questions=answered,
            progress=compute_progress(answered, total),
            meets_completion_threshold=meets_threshold(answered, total, settings.COMPLETION_THRESHOLD_RATIO),
        )

    async def complete_assessment(self, user_id: int, assessment_id: int) -> CompletionResult:
        """
        Recompute criterion scores and mark the assessment completed.

        Each criterion row and the final status update are committed
        separately; a failure part-way leaves the criterion rows written
        and the assessment still in progress. Re-running recomputes
        everything from the stored answers.
        """
        assessment = await self.get_assessment(user_id, assessment_id)
        questions = await self.type_repository.list_questions(assessment.assessment_type_id)
        answers = await self.answer_repository.list_for_assessment(assessment.id)

        if settings.ENFORCE_COMPLETION_THRESHOLD:
            assessment_type = await self.get_assessment_type(assessment)
            answered = count_answered(answers)
            if not meets_threshold(answered, assessment_type.total_questions, settings.COMPLETION_THRESHOLD_RATIO):
                raise_app_error(
                    status.HTTP_409_CONFLICT,
                    "completion_threshold_not_met",
                    "Please answer at least {:.0%} of questions before completing".format(
                        settings.COMPLETION_THRESHOLD_RATIO
                    ),
                    {"answered_questions": answered, "total_questions": assessment_type.total_questions},
                )

        summary = aggregate_scores(questions, answers)

        for criterion in summary.criteria:
            await self.score_repository.upsert(
                assessment_id=assessment.id,
                criterion_number=criterion.criterion_number,
                criterion_name=criterion.criterion_name,
                average_score=criterion.average_score,
                total_questions=criterion.total_questions,
                answered_questions=criterion.answered_questions,
            )
            await self.db.commit()

        await self.repository.update(
            user_id,
            assessment.id,
            AssessmentUpdate(
                status=AssessmentStatus.COMPLETED,
                completed_at=utc_now(),
                total_score=summary.total_score,
            ),
        )
        await self.db.commit()

        logger.info(
            "Completed assessment %s: %d criteria, total score %.2f",
            assessment.id,
            len(summary.criteria),
            summary.total_score,
        )
        return CompletionResult(success=True, total_score=summary.total_score)
