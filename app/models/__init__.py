"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.user import User
from app.models.client import Client
from app.models.assessment_type import AssessmentType, Question
from app.models.assessment import Assessment, AssessmentStatus, Answer, CriterionScore
from app.models.report import Report

# Export all models
__all__ = [
    "User",
    "Client",
    "AssessmentType",
    "Question",
    "Assessment",
    "AssessmentStatus",
    "Answer",
    "CriterionScore",
    "Report",
]
