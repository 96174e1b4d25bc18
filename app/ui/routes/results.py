"""
Results routes for UI: scorecard, radar chart and on-demand insights.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.errors import AppError, NotFoundError
from app.models.user import User
from app.routers.analysis import get_llm_client
from app.services.analysis_service import AnalysisService
from app.services.assessment_service import AssessmentService
from app.services.llm_client import LLMClient
from app.ui.dependencies import flash_context, get_current_ui_user, templates


router = APIRouter()
logger = logging.getLogger(__name__)


async def _render_results(request: Request, db: AsyncSession, current_user: User, assessment_id: int, **extra):
    try:
        assessment = await AssessmentService(db).get_assessment(current_user.id, assessment_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/assessments", status_code=303)

    scores = await AnalysisService(db).get_scores(current_user.id, assessment.id)
    chart = {
        "labels": [f"C{s.criterion_number}" for s in scores],
        "names": [s.criterion_name for s in scores],
        "scores": [round(s.average_score, 2) for s in scores],
    }

    context = {
        "current_user": current_user,
        "active_page": "assessments",
        "assessment": assessment,
        "scores": scores,
        "chart": chart,
        "insights": None,
        **flash_context(request),
    }
    context.update(extra)
    return templates.TemplateResponse(request, "results.html", context)


@router.get("/ui/results/{assessment_id}", response_class=HTMLResponse)
async def results_page(
    request: Request,
    assessment_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Overall score, per-criterion breakdown and radar chart.
    """
    return await _render_results(request, db, current_user, assessment_id)


@router.post("/ui/results/{assessment_id}/insights", response_class=HTMLResponse)
async def results_insights(
    request: Request,
    assessment_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
    llm_client: LLMClient = Depends(get_llm_client),
):
    """
    Generate insights and render them once. They are not stored.
    """
    service = AnalysisService(db, llm_client=llm_client)
    try:
        insights = await service.generate_insights(current_user.id, assessment_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/assessments", status_code=303)
    except AppError as exc:
        logger.warning("Insight generation failed for assessment %s: %s", assessment_id, exc.code)
        return await _render_results(
            request, db, current_user, assessment_id, error_message="Failed to generate insights"
        )

    return await _render_results(
        request,
        db,
        current_user,
        assessment_id,
        insights=insights,
        success_message="AI insights generated successfully",
    )
