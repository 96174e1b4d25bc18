"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.session import session_manager
from app.db.session import get_db
from app.errors import AppError
from app.models.user import User
from app.repositories.user_repository import UserRepository

__all__ = ["get_db", "get_optional_user", "get_current_user"]


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Resolve the user behind the session cookie, or None.

    An invalid, expired or dangling session is treated as anonymous.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None

    session_data = session_manager.verify_session_token(token)
    if not session_data or "user_id" not in session_data:
        return None

    user_repository = UserRepository(db)
    return await user_repository.get_by_id(int(session_data["user_id"]))


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    """
    Require an authenticated user.

    Raises:
        AppError: 401 if there is no valid session
    """
    if user is None:
        raise AppError(status.HTTP_401_UNAUTHORIZED, "unauthorized", "Please login")
    return user
