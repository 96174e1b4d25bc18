"""
Authentication routes for UI.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db
from app.routers.auth import set_session_cookie
from app.schemas.user import UserUpsert
from app.services.auth_service import AuthService
from app.ui.dependencies import get_optional_ui_user, templates


router = APIRouter()


def _login_page(request: Request, error: Optional[str] = None, open_id: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "error": error,
            "open_id": open_id,
            "direct_login_enabled": settings.AUTH_DIRECT_LOGIN_ENABLED,
        },
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    current_user=Depends(get_optional_ui_user),
):
    """
    Display login form.

    If user is already logged in, redirect to dashboard.
    """
    if current_user:
        return RedirectResponse(url="/dashboard", status_code=303)

    return _login_page(request)


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    open_id: str = Form(...),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Process login form submission.

    Signs the identity in and creates the session cookie on success.
    """
    if not settings.AUTH_DIRECT_LOGIN_ENABLED:
        return _login_page(request, error="Direct login is disabled", status_code=403)

    try:
        profile = {"name": (name or "").strip(), "email": (email or "").strip()}
        identity = UserUpsert(
            open_id=open_id.strip(),
            login_method="direct",
            **{field: value for field, value in profile.items() if value},
        )
    except ValidationError:
        return _login_page(request, error="Invalid sign-in details", open_id=open_id, status_code=400)

    auth_service = AuthService(db)
    user = await auth_service.sign_in(identity)
    await db.commit()

    response = RedirectResponse(url="/dashboard", status_code=303)
    set_session_cookie(response, auth_service.create_session_token(user))
    return response


@router.get("/logout")
async def logout():
    """
    Log out by clearing session cookie.
    """
    response = RedirectResponse(url="/login", status_code=303)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return response
