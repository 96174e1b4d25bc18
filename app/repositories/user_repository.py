"""
User repository - database operations for User.
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.upsert import dialect_insert
from app.models.user import User
from app.schemas.user import UserUpsert
from app.utils.time import utc_now


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, data: UserUpsert) -> User:
        """
        Insert or update a user keyed by open_id.

        Only fields present in the payload are written on update. When no
        role is given, the configured owner open_id is promoted to admin.
        """
        values = data.model_dump(exclude_unset=True, exclude={"open_id"})

        if "role" not in values or values["role"] is None:
            values.pop("role", None)
            if settings.OWNER_OPEN_ID and data.open_id == settings.OWNER_OPEN_ID:
                values["role"] = "admin"

        if not values.get("last_signed_in"):
            values["last_signed_in"] = utc_now()

        base_insert = dialect_insert(self.db, User).values(open_id=data.open_id, **values)
        stmt = base_insert.on_conflict_do_update(
            index_elements=[User.open_id],
            set_={**values, "updated_at": func.now()},
        ).returning(User)
        result = await self.db.execute(stmt, execution_options={"populate_existing": True})
        user = result.scalar_one()
        await self.db.flush()
        return user
