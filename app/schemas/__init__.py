"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.base import CreatedResponse, SuccessResponse
from app.schemas.user import UserUpsert, UserRead
from app.schemas.client import ClientCreate, ClientUpdate, ClientRead
from app.schemas.assessment_type import AssessmentTypeRead, QuestionRead
from app.schemas.assessment import (
    AssessmentCreate,
    AssessmentUpdate,
    AssessmentRead,
    AssessmentProgress,
    CompletionResult,
)
from app.schemas.answer import AnswerInput, AnswerSave, AnswerBatchSave, AnswerRead
from app.schemas.analysis import CriterionScoreRead, AssessmentInsights
from app.schemas.report import ReportCreate, ReportRead

__all__ = [
    # Generic responses
    "CreatedResponse", "SuccessResponse",
    # User
    "UserUpsert", "UserRead",
    # Client
    "ClientCreate", "ClientUpdate", "ClientRead",
    # AssessmentType / Question
    "AssessmentTypeRead", "QuestionRead",
    # Assessment
    "AssessmentCreate", "AssessmentUpdate", "AssessmentRead", "AssessmentProgress", "CompletionResult",
    # Answer
    "AnswerInput", "AnswerSave", "AnswerBatchSave", "AnswerRead",
    # Analysis
    "CriterionScoreRead", "AssessmentInsights",
    # Report
    "ReportCreate", "ReportRead",
]
