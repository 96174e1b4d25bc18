"""
Authentication router: session identity, sign-in and logout.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.dependencies import get_db, get_optional_user
from app.errors import AppError
from app.models.user import User
from app.schemas.base import SuccessResponse
from app.schemas.user import UserRead, UserUpsert
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        samesite="lax",
    )


@router.get("/me", response_model=Optional[UserRead])
async def get_me(
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Return the signed-in user, or null for anonymous callers."""
    return current_user


@router.post("/login", response_model=UserRead)
async def login(
    identity: UserUpsert,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Sign in with an identity handed over by the identity provider.

    Creates or refreshes the user and sets the session cookie.
    """
    if not settings.AUTH_DIRECT_LOGIN_ENABLED:
        raise AppError(status.HTTP_403_FORBIDDEN, "direct_login_disabled", "Direct login is disabled")

    auth_service = AuthService(db)
    user = await auth_service.sign_in(identity)
    await db.commit()

    set_session_cookie(response, auth_service.create_session_token(user))
    return user


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    """Log out by clearing the session cookie."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return SuccessResponse()
