"""
Analysis service: stored criterion scores and LLM-generated insights.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.assessment import CriterionScore
from app.repositories.answer_repository import AnswerRepository
from app.repositories.assessment_repository import AssessmentRepository
from app.repositories.assessment_type_repository import AssessmentTypeRepository
from app.repositories.client_repository import ClientRepository
from app.repositories.criterion_score_repository import CriterionScoreRepository
from app.schemas.analysis import ASSESSMENT_ANALYSIS_SCHEMA, AssessmentInsights
from app.services.llm_client import LLMClient, LLMError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a business consultant providing actionable insights."

LOW_SCORE_THRESHOLD = 3
MAX_LOW_SCORING_QUESTIONS = 10

RESPONSE_SHAPE = """{
  "executiveSummary": "2-3 paragraph summary of overall findings",
  "keyStrengths": ["strength 1", "strength 2", "strength 3"],
  "criticalGaps": ["gap 1", "gap 2", "gap 3"],
  "actionItems": [
    {
      "priority": "High|Medium|Low",
      "title": "Action item title",
      "description": "Detailed description",
      "criterion": "Criterion name",
      "estimatedImpact": "Expected impact"
    }
  ],
  "implementationTimeline": {
    "immediate": ["action 1", "action 2"],
    "shortTerm": ["action 1", "action 2"],
    "longTerm": ["action 1", "action 2"]
  }
}"""


def select_low_scoring(answers, questions) -> List[str]:
    """
    Render answers scored below 3 as prompt lines, at most 10.

    Answers whose question is unknown are dropped before the cap applies.
    """
    question_text = {q.id: q.question_text for q in questions}
    lines = []
    for answer in answers:
        if answer.score is None or answer.score >= LOW_SCORE_THRESHOLD:
            continue
        text = question_text.get(answer.question_id)
        if text is None:
            continue
        lines.append(f"- {text} (Score: {answer.score}/5)")
    return lines[:MAX_LOW_SCORING_QUESTIONS]


def build_insights_prompt(
    assessment_type_name: Optional[str],
    company_name: Optional[str],
    industry: Optional[str],
    criterion_scores,
    low_scoring: List[str],
) -> str:
    criterion_lines = "\n".join(
        f"- Criterion {c.criterion_number} ({c.criterion_name}): {c.average_score:.2f}/5 "
        f"({c.answered_questions}/{c.total_questions} questions answered)"
        for c in criterion_scores
    )
    low_scoring_lines = "\n".join(low_scoring)
    return (
        "You are a business consultant analyzing assessment results.\n\n"
        f"Assessment Type: {assessment_type_name}\n"
        f"Client: {company_name}\n"
        f"Industry: {industry or 'Not specified'}\n\n"
        "Criterion Scores (out of 5):\n"
        f"{criterion_lines}\n\n"
        "Low-scoring questions (score < 3):\n"
        f"{low_scoring_lines}\n\n"
        "Provide a comprehensive analysis in JSON format with the following structure:\n"
        f"{RESPONSE_SHAPE}"
    )


class AnalysisService:
    """Service for score read-back and insight generation."""

    def __init__(self, db: AsyncSession, llm_client: Optional[LLMClient] = None):
        self.assessment_repository = AssessmentRepository(db)
        self.client_repository = ClientRepository(db)
        self.type_repository = AssessmentTypeRepository(db)
        self.answer_repository = AnswerRepository(db)
        self.score_repository = CriterionScoreRepository(db)
        self.llm_client = llm_client or LLMClient()

    async def get_scores(self, user_id: int, assessment_id: int) -> List[CriterionScore]:
        """Stored criterion scores of an assessment owned by the user."""
        if not await self.assessment_repository.get_by_id(user_id, assessment_id):
            raise NotFoundError("Assessment not found")
        return await self.score_repository.list_for_assessment(assessment_id)

    async def generate_insights(self, user_id: int, assessment_id: int) -> AssessmentInsights:
        """
        Ask the LLM for a narrative analysis of the stored scores.

        The result is returned to the caller only.
        """
        assessment = await self.assessment_repository.get_by_id(user_id, assessment_id)
        if not assessment:
            raise NotFoundError("Assessment not found")

        client = await self.client_repository.get_by_id(user_id, assessment.client_id)
        assessment_type = await self.type_repository.get_by_id(assessment.assessment_type_id)
        criterion_scores = await self.score_repository.list_for_assessment(assessment.id)
        answers = await self.answer_repository.list_for_assessment(assessment.id)
        questions = await self.type_repository.list_questions(assessment.assessment_type_id)

        prompt = build_insights_prompt(
            assessment_type_name=assessment_type.name if assessment_type else None,
            company_name=client.company_name if client else None,
            industry=client.industry if client else None,
            criterion_scores=criterion_scores,
            low_scoring=select_low_scoring(answers, questions),
        )

        logger.info("Generating insights for assessment %s", assessment.id)
        data = await self.llm_client.complete_json(
            SYSTEM_PROMPT,
            prompt,
            "assessment_analysis",
            ASSESSMENT_ANALYSIS_SCHEMA,
        )

        try:
            return AssessmentInsights.model_validate(data)
        except ValidationError as exc:
            raise LLMError("LLM response did not match the analysis schema", {"errors": exc.errors(include_url=False, include_context=False, include_input=False)}) from exc
