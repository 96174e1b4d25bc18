"""
Dashboard route for UI.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.models.assessment import AssessmentStatus
from app.models.user import User
from app.services.assessment_service import AssessmentService
from app.services.client_service import ClientService
from app.ui.dependencies import flash_context, get_current_ui_user, templates


router = APIRouter()

RECENT_ASSESSMENTS_LIMIT = 5


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Home screen with client/assessment counts and recent assessments.
    """
    clients = await ClientService(db).list_clients(current_user.id)
    assessments = await AssessmentService(db).list_assessments(current_user.id)

    stats = {
        "clients": len(clients),
        "assessments": len(assessments),
        "completed": sum(1 for a in assessments if a.status == AssessmentStatus.COMPLETED),
        "in_progress": sum(1 for a in assessments if a.status == AssessmentStatus.IN_PROGRESS),
    }

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "current_user": current_user,
            "active_page": "dashboard",
            "stats": stats,
            "recent_assessments": assessments[:RECENT_ASSESSMENTS_LIMIT],
            **flash_context(request),
        },
    )
