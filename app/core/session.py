"""
Session management.

Handles the signed session cookie used by both the JSON API and the UI.
"""

from typing import Optional

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from app.core.config import settings
from app.models.user import User


class SessionManager:
    """Creates and verifies signed session tokens."""

    def __init__(self, secret_key: str, max_age: int):
        self.serializer = URLSafeTimedSerializer(secret_key, salt="session")
        self.max_age = max_age

    def create_session_token(self, user: User) -> str:
        """
        Create a signed session token for a user.

        Args:
            user: The signed-in user

        Returns:
            Signed token string
        """
        data = {
            "user_id": user.id,
            "open_id": user.open_id,
            "role": user.role,
        }
        return self.serializer.dumps(data)

    def verify_session_token(self, token: str) -> Optional[dict]:
        """
        Verify and decode a session token.

        Returns:
            Dict with user_id, open_id, role if valid, None otherwise
        """
        try:
            return self.serializer.loads(token, max_age=self.max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global session manager instance
session_manager = SessionManager(settings.SECRET_KEY, settings.SESSION_MAX_AGE_SECONDS)
