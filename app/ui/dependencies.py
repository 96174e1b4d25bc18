"""
UI dependencies for authentication, templates and flash messages.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.dependencies import get_optional_user
from app.models.user import User

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


async def get_current_ui_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """
    Get current user from session cookie.

    If session is invalid or missing, raises HTTPException with redirect.
    Use this dependency in all UI routes that require authentication.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Not authenticated",
            headers={"Location": "/login"},
        )
    return user


async def get_optional_ui_user(
    user: Optional[User] = Depends(get_optional_user),
) -> Optional[User]:
    """
    Get current user from session cookie, or None if not authenticated.

    Use this for pages like login where we want to check if already logged in.
    """
    return user


def flash_context(request: Request) -> dict:
    """Pick the one-shot success/error messages passed through the query string."""
    return {
        "success_message": request.query_params.get("success_message"),
        "error_message": request.query_params.get("error_message"),
    }


def redirect_with_message(url: str, success: Optional[str] = None, error: Optional[str] = None) -> RedirectResponse:
    """303 redirect carrying a flash message for the next page."""
    params = {}
    if success:
        params["success_message"] = success
    if error:
        params["error_message"] = error
    if params:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}{urlencode(params)}"
    return RedirectResponse(url=url, status_code=303)


def score_band(score: Optional[float]) -> str:
    """Colour band of an average score: good (>= 4), fair (>= 3) or poor."""
    if score is None:
        return "none"
    if score >= 4:
        return "good"
    if score >= 3:
        return "fair"
    return "poor"


templates.env.filters["score_band"] = score_band
