"""
Service-level tests for clients, assessments, answers and completion.
"""

import pytest
from sqlalchemy import event, func, select

from app.core.config import settings
from app.errors import AppError, NotFoundError
from app.models.assessment import Answer, AssessmentStatus, CriterionScore
from app.models.assessment_type import AssessmentType
from app.repositories.answer_repository import AnswerRepository
from app.schemas.answer import AnswerBatchSave, AnswerInput, AnswerSave
from app.schemas.assessment import AssessmentCreate
from app.schemas.client import ClientCreate, ClientUpdate
from app.services.answer_service import AnswerService
from app.services.assessment_service import AssessmentService
from app.services.client_service import ClientService

OWNER = 1
OTHER_USER = 2


async def start_assessment(db, assessment_type, user_id=OWNER):
    client = await ClientService(db).create_client(user_id, ClientCreate(company_name="Acme Ltd", industry="Retail"))
    assessment = await AssessmentService(db).create_assessment(
        user_id,
        AssessmentCreate(client_id=client.id, assessment_type_id=assessment_type.id, title="Q3 review"),
    )
    await db.commit()
    return client, assessment


async def answer_all(db, assessment, questions, scores):
    await AnswerService(db).batch_save_answers(
        OWNER,
        AnswerBatchSave(
            assessment_id=assessment.id,
            answers=[AnswerInput(question_id=q.id, score=s) for q, s in zip(questions, scores)],
        ),
    )
    await db.commit()


@pytest.mark.asyncio
async def test_client_crud_is_scoped_to_owner(db):
    service = ClientService(db)
    client = await service.create_client(OWNER, ClientCreate(company_name="Acme Ltd"))
    await db.commit()

    assert [c.id for c in await service.list_clients(OWNER)] == [client.id]
    assert await service.list_clients(OTHER_USER) == []

    with pytest.raises(NotFoundError):
        await service.get_client(OTHER_USER, client.id)
    with pytest.raises(NotFoundError):
        await service.update_client(OTHER_USER, client.id, ClientUpdate(industry="Energy"))
    with pytest.raises(NotFoundError):
        await service.delete_client(OTHER_USER, client.id)

    updated = await service.update_client(OWNER, client.id, ClientUpdate(industry="Energy"))
    assert updated.industry == "Energy"
    assert updated.company_name == "Acme Ltd"

    await service.delete_client(OWNER, client.id)
    await db.commit()
    assert await service.list_clients(OWNER) == []


@pytest.mark.asyncio
async def test_assessment_requires_owned_client(db, seeded_type):
    assessment_type, _ = seeded_type
    client = await ClientService(db).create_client(OTHER_USER, ClientCreate(company_name="Globex"))
    await db.commit()

    with pytest.raises(NotFoundError):
        await AssessmentService(db).create_assessment(
            OWNER,
            AssessmentCreate(client_id=client.id, assessment_type_id=assessment_type.id, title="Not mine"),
        )


@pytest.mark.asyncio
async def test_new_assessment_starts_in_progress(db, seeded_type):
    assessment_type, _ = seeded_type
    _, assessment = await start_assessment(db, assessment_type)

    assert assessment.status == AssessmentStatus.IN_PROGRESS
    assert assessment.started_at is not None
    assert assessment.completed_at is None
    assert assessment.total_score is None


@pytest.mark.asyncio
async def test_saving_an_answer_twice_keeps_one_row(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    service = AnswerService(db)

    await service.save_answer(OWNER, AnswerSave(assessment_id=assessment.id, question_id=questions[0].id, score=2))
    await service.save_answer(
        OWNER,
        AnswerSave(assessment_id=assessment.id, question_id=questions[0].id, score=5, notes="revisited"),
    )
    await db.commit()

    answers = await service.list_answers(OWNER, assessment.id)
    assert len(answers) == 1
    assert answers[0].score == 5
    assert answers[0].notes == "revisited"


@pytest.mark.asyncio
async def test_answer_upsert_is_one_statement_and_last_write_wins(engine, session_maker, db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)

    async with session_maker() as first, session_maker() as second:
        # The second writer looked before the first one saved
        assert await AnswerRepository(second).list_for_assessment(assessment.id) == []
        await second.commit()

        await AnswerRepository(first).upsert(assessment.id, questions[0].id, 2)
        await first.commit()

        statements = []

        def record(conn, cursor, statement, parameters, context, executemany):
            if statement.lstrip().upper().startswith(("SELECT", "INSERT", "UPDATE")):
                statements.append(statement)

        event.listen(engine.sync_engine, "before_cursor_execute", record)
        try:
            answer = await AnswerRepository(second).upsert(assessment.id, questions[0].id, 5, "second writer")
            await second.commit()
        finally:
            event.remove(engine.sync_engine, "before_cursor_execute", record)

    assert len(statements) == 1
    assert "ON CONFLICT" in statements[0].upper()
    assert (answer.score, answer.notes) == (5, "second writer")

    rows = (await db.execute(select(Answer).where(Answer.assessment_id == assessment.id))).scalars().all()
    assert [(row.question_id, row.score, row.notes) for row in rows] == [(questions[0].id, 5, "second writer")]


@pytest.mark.asyncio
async def test_answers_of_another_users_assessment_are_not_found(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)

    with pytest.raises(NotFoundError):
        await AnswerService(db).save_answer(
            OTHER_USER,
            AnswerSave(assessment_id=assessment.id, question_id=questions[0].id, score=3),
        )
    with pytest.raises(NotFoundError):
        await AnswerService(db).list_answers(OTHER_USER, assessment.id)


@pytest.mark.asyncio
async def test_progress_counts_scored_answers(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions[:3], [2, 4, None])

    progress = await AssessmentService(db).get_progress(OWNER, assessment.id)

    assert progress.total_questions == 5
    assert progress.answered_questions == 2
    assert progress.progress == 40.0
    assert progress.meets_completion_threshold is False


@pytest.mark.asyncio
async def test_progress_is_null_for_type_without_questions(db):
    empty_type = AssessmentType(name="Empty", description=None, total_questions=0)
    db.add(empty_type)
    await db.commit()
    _, assessment = await start_assessment(db, empty_type)

    progress = await AssessmentService(db).get_progress(OWNER, assessment.id)

    assert progress.progress is None
    assert progress.answered_questions == 0


@pytest.mark.asyncio
async def test_complete_stores_criterion_scores_and_total(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions[:3], [2, 4, None])

    service = AssessmentService(db)
    result = await service.complete_assessment(OWNER, assessment.id)

    assert result.success is True
    assert result.total_score == 3.0

    scores = (
        await db.execute(
            select(CriterionScore)
            .where(CriterionScore.assessment_id == assessment.id)
            .order_by(CriterionScore.criterion_number)
        )
    ).scalars().all()
    assert [(s.criterion_number, s.average_score, s.answered_questions, s.total_questions) for s in scores] == [
        (1, 3.0, 2, 3),
        (2, 0, 0, 2),
    ]

    completed = await service.get_assessment(OWNER, assessment.id)
    assert completed.status == AssessmentStatus.COMPLETED
    assert completed.completed_at is not None
    assert completed.total_score == 3.0


@pytest.mark.asyncio
async def test_complete_is_idempotent_and_recomputes(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions[:2], [2, 4])
    service = AssessmentService(db)

    await service.complete_assessment(OWNER, assessment.id)
    await answer_all(db, assessment, questions[3:5], [5, 5])
    result = await service.complete_assessment(OWNER, assessment.id)

    row_count = await db.scalar(
        select(func.count()).select_from(CriterionScore).where(CriterionScore.assessment_id == assessment.id)
    )
    assert row_count == 2
    assert result.total_score == 4.0


async def criterion_rows(db, assessment_id):
    rows = (
        await db.execute(
            select(CriterionScore)
            .where(CriterionScore.assessment_id == assessment_id)
            .order_by(CriterionScore.criterion_number)
        )
    ).scalars().all()
    return [
        (row.criterion_number, row.criterion_name, row.average_score, row.answered_questions, row.total_questions)
        for row in rows
    ]


@pytest.mark.asyncio
async def test_complete_twice_with_same_answers_gives_same_result(db, seeded_type):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions, [1, 2, 4, 5, 3])
    service = AssessmentService(db)

    first = await service.complete_assessment(OWNER, assessment.id)
    first_rows = await criterion_rows(db, assessment.id)
    second = await service.complete_assessment(OWNER, assessment.id)
    second_rows = await criterion_rows(db, assessment.id)

    assert first_rows == [
        (1, "Recognize", pytest.approx(7 / 3), 3, 3),
        (2, "Define", 4.0, 2, 2),
    ]
    assert second_rows == first_rows
    assert second.total_score == first.total_score == pytest.approx((7 / 3 + 4.0) / 2)


@pytest.mark.asyncio
async def test_complete_failing_mid_way_keeps_earlier_criteria(db, seeded_type, monkeypatch):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions, [2, 4, 3, 5, 5])

    service = AssessmentService(db)
    real_upsert = service.score_repository.upsert

    async def upsert_failing_on_second_criterion(**kwargs):
        if kwargs["criterion_number"] == 2:
            raise RuntimeError("connection lost")
        return await real_upsert(**kwargs)

    monkeypatch.setattr(service.score_repository, "upsert", upsert_failing_on_second_criterion)

    with pytest.raises(RuntimeError):
        await service.complete_assessment(OWNER, assessment.id)

    assert await criterion_rows(db, assessment.id) == [(1, "Recognize", 3.0, 3, 3)]
    unfinished = await AssessmentService(db).get_assessment(OWNER, assessment.id)
    assert unfinished.status == AssessmentStatus.IN_PROGRESS
    assert unfinished.total_score is None

    result = await AssessmentService(db).complete_assessment(OWNER, assessment.id)

    assert result.total_score == 4.0
    assert await criterion_rows(db, assessment.id) == [(1, "Recognize", 3.0, 3, 3), (2, "Define", 5.0, 2, 2)]


@pytest.mark.asyncio
async def test_complete_failing_on_status_update_leaves_assessment_in_progress(db, seeded_type, monkeypatch):
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions[:3], [2, 4, None])

    service = AssessmentService(db)

    async def failing_update(*args, **kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(service.repository, "update", failing_update)

    with pytest.raises(RuntimeError):
        await service.complete_assessment(OWNER, assessment.id)

    assert await criterion_rows(db, assessment.id) == [(1, "Recognize", 3.0, 2, 3), (2, "Define", 0, 0, 2)]
    unfinished = await AssessmentService(db).get_assessment(OWNER, assessment.id)
    assert unfinished.status == AssessmentStatus.IN_PROGRESS
    assert unfinished.completed_at is None


@pytest.mark.asyncio
async def test_complete_with_no_answers_scores_zero(db, seeded_type):
    assessment_type, _ = seeded_type
    _, assessment = await start_assessment(db, assessment_type)

    result = await AssessmentService(db).complete_assessment(OWNER, assessment.id)

    assert result.total_score == 0
    answer_count = await db.scalar(select(func.count()).select_from(Answer))
    assert answer_count == 0


@pytest.mark.asyncio
async def test_complete_enforces_threshold_when_enabled(db, seeded_type, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_COMPLETION_THRESHOLD", True)
    assessment_type, questions = seeded_type
    _, assessment = await start_assessment(db, assessment_type)
    await answer_all(db, assessment, questions[:2], [3, 3])

    with pytest.raises(AppError) as exc_info:
        await AssessmentService(db).complete_assessment(OWNER, assessment.id)

    assert exc_info.value.status_code == 409
    assert exc_info.value.code == "completion_threshold_not_met"


@pytest.mark.asyncio
async def test_complete_of_another_users_assessment_is_not_found(db, seeded_type):
    assessment_type, _ = seeded_type
    _, assessment = await start_assessment(db, assessment_type)

    with pytest.raises(NotFoundError):
        await AssessmentService(db).complete_assessment(OTHER_USER, assessment.id)
