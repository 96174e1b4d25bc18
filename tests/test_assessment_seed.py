"""
Tests for loading assessment types and questions from a questions file.
"""

import json

import pytest
from sqlalchemy import func, select

from app.models.assessment_type import AssessmentType, Question
from app.services import assessment_seed
from app.services.assessment_seed import describe_assessment, load_questions, seed_assessment_types


def question(assessment, criterion_number, question_number):
    return {
        "assessment": assessment,
        "criterion_number": criterion_number,
        "criterion_name": f"Criterion {criterion_number}",
        "question_number": question_number,
        "question_text": f"{assessment} {criterion_number}.{question_number}",
    }


@pytest.mark.unit
def test_known_and_fallback_descriptions():
    assert describe_assessment("Workplace Strategy").startswith("Strategic assessment of workplace design")
    assert describe_assessment("Supply Chain") == "Professional assessment framework for Supply Chain"


@pytest.mark.unit
def test_load_questions_rejects_incomplete_items(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps([{"assessment": "Business Control", "criterion_number": 1}]), encoding="utf-8")

    with pytest.raises(ValueError, match="missing"):
        load_questions(path)


@pytest.mark.asyncio
async def test_seed_creates_types_and_batches_questions(db, monkeypatch):
    monkeypatch.setattr(assessment_seed, "QUESTION_BATCH_SIZE", 2)
    items = [question("Business Control", 1, n) for n in range(1, 4)] + [question("Workplace Strategy", 1, 1)]

    summary = await seed_assessment_types(db, items)
    await db.commit()

    assert summary.created_types == ["Business Control", "Workplace Strategy"]
    assert summary.questions_inserted == 4

    business_control = (
        await db.execute(select(AssessmentType).where(AssessmentType.name == "Business Control"))
    ).scalar_one()
    assert business_control.total_questions == 3
    assert business_control.description.startswith("Comprehensive assessment of business control")
    question_count = await db.scalar(
        select(func.count()).select_from(Question).where(Question.assessment_type_id == business_control.id)
    )
    assert question_count == 3


@pytest.mark.asyncio
async def test_seed_skips_existing_types(db):
    items = [question("Business Control", 1, 1)]
    await seed_assessment_types(db, items)
    await db.commit()

    summary = await seed_assessment_types(db, items + [question("IT Management Services", 1, 1)])
    await db.commit()

    assert summary.skipped_types == ["Business Control"]
    assert summary.created_types == ["IT Management Services"]
    assert await db.scalar(select(func.count()).select_from(Question)) == 2
