"""
Loading assessment types and their questions from an extracted JSON file.

Each item of the file looks like:
    {"assessment": "Business Control", "criterion_number": 1,
     "criterion_name": "Recognize", "question_number": 1,
     "question_text": "..."}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.assessment_type import Question
from app.repositories.assessment_type_repository import AssessmentTypeRepository

logger = logging.getLogger(__name__)

QUESTION_BATCH_SIZE = 100

KNOWN_DESCRIPTIONS = {
    "Business Control": (
        "Comprehensive assessment of business control practices, process architecture, "
        "design and quality management. Covers 7 key criteria: Recognize, Define, Measure, "
        "Analyze, Improve, Control, and Sustain."
    ),
    "IT Management Services": (
        "Assessment framework for IT management services, infrastructure, and technology "
        "governance. Evaluates IT service delivery, management practices, and alignment "
        "with business objectives."
    ),
    "Workplace Strategy": (
        "Strategic assessment of workplace design, culture, and operational effectiveness. "
        "Examines workplace environment, employee engagement, and organizational productivity."
    ),
}

REQUIRED_FIELDS = ("assessment", "criterion_number", "criterion_name", "question_number", "question_text")


@dataclass
class SeedSummary:
    created_types: List[str] = field(default_factory=list)
    skipped_types: List[str] = field(default_factory=list)
    questions_inserted: int = 0


def describe_assessment(name: str) -> str:
    return KNOWN_DESCRIPTIONS.get(name, f"Professional assessment framework for {name}")


def load_questions(path: Union[str, Path]) -> List[dict]:
    """Read the question list, rejecting items with missing fields."""
    with open(path, encoding="utf-8") as fh:
        items = json.load(fh)

    if not isinstance(items, list):
        raise ValueError("Questions file must contain a JSON list")

    for index, item in enumerate(items):
        missing = [name for name in REQUIRED_FIELDS if name not in item]
        if missing:
            raise ValueError(f"Question #{index} is missing {', '.join(missing)}")
    return items


def group_by_assessment(items: List[dict]) -> Dict[str, List[dict]]:
    """Group question items by assessment name, keeping file order."""
    groups: Dict[str, List[dict]] = {}
    for item in items:
        groups.setdefault(item["assessment"], []).append(item)
    return groups


async def seed_assessment_types(db: AsyncSession, items: List[dict]) -> SeedSummary:
    """
    Insert one assessment type per group plus its questions.

    Types whose name already exists are left untouched. Questions are
    flushed in batches of QUESTION_BATCH_SIZE; the caller commits.
    """
    repository = AssessmentTypeRepository(db)
    summary = SeedSummary()

    for name, questions in group_by_assessment(items).items():
        if await repository.get_by_name(name):
            logger.info("Skipping existing assessment type %r", name)
            summary.skipped_types.append(name)
            continue

        assessment_type = await repository.create(
            name=name,
            description=describe_assessment(name),
            total_questions=len(questions),
        )
        summary.created_types.append(name)
        logger.info("Created assessment type %r: %d questions (ID: %s)", name, len(questions), assessment_type.id)

        for start in range(0, len(questions), QUESTION_BATCH_SIZE):
            batch = questions[start:start + QUESTION_BATCH_SIZE]
            await repository.add_questions(
                [
                    Question(
                        assessment_type_id=assessment_type.id,
                        criterion_number=int(q["criterion_number"]),
                        criterion_name=q["criterion_name"],
                        question_number=int(q["question_number"]),
                        question_text=q["question_text"],
                    )
                    for q in batch
                ]
            )
            summary.questions_inserted += len(batch)

    return summary
