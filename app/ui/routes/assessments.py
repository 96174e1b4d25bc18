"""
Assessment routes for UI: list, start, questionnaire and completion.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db
from app.errors import AppError, NotFoundError
from app.models.user import User
from app.repositories.assessment_type_repository import AssessmentTypeRepository
from app.schemas.answer import AnswerBatchSave, AnswerInput
from app.schemas.assessment import AssessmentCreate
from app.services.answer_service import AnswerService
from app.services.assessment_service import AssessmentService
from app.services.client_service import ClientService
from app.ui.dependencies import flash_context, get_current_ui_user, redirect_with_message, templates


router = APIRouter()


def group_by_criterion(questions) -> List[Dict]:
    """Questions grouped per criterion, in criterion order."""
    groups: Dict[int, Dict] = {}
    for question in questions:
        group = groups.setdefault(
            question.criterion_number,
            {"number": question.criterion_number, "name": question.criterion_name, "questions": []},
        )
        group["questions"].append(question)
    return [groups[number] for number in sorted(groups)]


def parse_score(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@router.get("/ui/assessments", response_class=HTMLResponse)
async def assessments_list(
    request: Request,
    client_id: Optional[int] = None,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List the user's assessments with the start-assessment form.
    """
    assessments = await AssessmentService(db).list_assessments(current_user.id, client_id=client_id)
    clients = await ClientService(db).list_clients(current_user.id)
    assessment_types = await AssessmentTypeRepository(db).list()

    return templates.TemplateResponse(
        request,
        "assessments.html",
        {
            "current_user": current_user,
            "active_page": "assessments",
            "assessments": assessments,
            "clients": clients,
            "client_names": {c.id: c.company_name for c in clients},
            "assessment_types": assessment_types,
            "type_names": {t.id: t.name for t in assessment_types},
            "selected_client_id": client_id,
            **flash_context(request),
        },
    )


@router.post("/ui/assessments/new")
async def assessment_create(
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
    title: str = Form(...),
    client_id: int = Form(...),
    assessment_type_id: int = Form(...),
):
    """
    Handle start-assessment form submission.
    """
    try:
        data = AssessmentCreate(
            title=title.strip(),
            client_id=client_id,
            assessment_type_id=assessment_type_id,
        )
        assessment = await AssessmentService(db).create_assessment(current_user.id, data)
    except (ValidationError, NotFoundError):
        return redirect_with_message("/ui/assessments", error="Failed to create assessment")

    await db.commit()
    return redirect_with_message(f"/ui/assessments/{assessment.id}", success="Assessment created successfully")


@router.post("/ui/assessments/{assessment_id}/delete")
async def assessment_delete(
    assessment_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an assessment. Answers and scores are left in place.
    """
    try:
        await AssessmentService(db).delete_assessment(current_user.id, assessment_id)
    except NotFoundError:
        return redirect_with_message("/ui/assessments", error="Failed to delete assessment")

    await db.commit()
    return redirect_with_message("/ui/assessments", success="Assessment deleted successfully")


@router.get("/ui/assessments/{assessment_id}", response_class=HTMLResponse)
async def assessment_detail(
    request: Request,
    assessment_id: int,
    criterion: Optional[int] = None,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Questionnaire page: one tab per criterion, 1-5 score and notes per question.
    """
    service = AssessmentService(db)
    try:
        assessment = await service.get_assessment(current_user.id, assessment_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/assessments", status_code=303)

    questions = await AssessmentTypeRepository(db).list_questions(assessment.assessment_type_id)
    answers = await AnswerService(db).list_answers(current_user.id, assessment.id)
    progress = await service.get_progress(current_user.id, assessment.id)

    criteria = group_by_criterion(questions)
    numbers = [c["number"] for c in criteria]
    active = criterion if criterion in numbers else (numbers[0] if numbers else None)
    next_criterion = None
    if active is not None and numbers.index(active) + 1 < len(numbers):
        next_criterion = numbers[numbers.index(active) + 1]

    return templates.TemplateResponse(
        request,
        "assessment_detail.html",
        {
            "current_user": current_user,
            "active_page": "assessments",
            "assessment": assessment,
            "criteria": criteria,
            "active_criterion": active,
            "next_criterion": next_criterion,
            "answers": {a.question_id: a for a in answers},
            "progress": progress,
            "threshold_percent": round(settings.COMPLETION_THRESHOLD_RATIO * 100),
            **flash_context(request),
        },
    )


@router.post("/ui/assessments/{assessment_id}/answers")
async def assessment_save_answers(
    request: Request,
    assessment_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Save the scores and notes of one criterion tab.

    The form carries question_id repeated once per question on the tab,
    with score_<id> and notes_<id> alongside.
    """
    form = await request.form()
    criterion = form.get("criterion")
    target = f"/ui/assessments/{assessment_id}"
    if criterion:
        target = f"{target}?criterion={criterion}"

    try:
        items = []
        for raw_id in form.getlist("question_id"):
            question_id = int(raw_id)
            notes = (form.get(f"notes_{question_id}") or "").strip() or None
            items.append(
                AnswerInput(
                    question_id=question_id,
                    score=parse_score(form.get(f"score_{question_id}")),
                    notes=notes,
                )
            )
        await AnswerService(db).batch_save_answers(
            current_user.id,
            AnswerBatchSave(assessment_id=assessment_id, answers=items),
        )
    except (ValueError, NotFoundError):
        return redirect_with_message(target, error="Failed to save answer")

    await db.commit()
    return redirect_with_message(target, success="Answers saved")


@router.post("/ui/assessments/{assessment_id}/complete")
async def assessment_complete(
    assessment_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Complete an assessment once enough questions are answered,
    then show its results.
    """
    service = AssessmentService(db)
    target = f"/ui/assessments/{assessment_id}"

    try:
        progress = await service.get_progress(current_user.id, assessment_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/assessments", status_code=303)

    if not progress.meets_completion_threshold:
        return redirect_with_message(
            target,
            error="Please answer at least {:.0%} of questions before completing".format(
                settings.COMPLETION_THRESHOLD_RATIO
            ),
        )

    try:
        await service.complete_assessment(current_user.id, assessment_id)
    except AppError:
        return redirect_with_message(target, error="Failed to complete assessment")

    return redirect_with_message(f"/ui/results/{assessment_id}", success="Assessment completed successfully!")
