"""
Authentication service for sign-in and session tokens.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.session import session_manager
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserUpsert


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.user_repository = UserRepository(db)

    async def sign_in(self, identity: UserUpsert) -> User:
        """
        Record a sign-in for the given identity.

        Creates the user on first sight, refreshes profile fields and
        last_signed_in otherwise.
        """
        return await self.user_repository.upsert(identity)

    def create_session_token(self, user: User) -> str:
        """Create the signed cookie value for a user."""
        return session_manager.create_session_token(user)
