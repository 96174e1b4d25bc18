"""
Client repository - database operations for Client.

Every query is scoped to the owning user.
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from app.models.client import Client
from app.schemas.client import ClientCreate, ClientUpdate


class ClientRepository:
    """Repository for Client database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, user_id: int) -> List[Client]:
        """List a user's clients, newest first."""
        result = await self.db.execute(
            select(Client)
            .where(Client.user_id == user_id)
            .order_by(Client.created_at.desc(), Client.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int, client_id: int) -> Optional[Client]:
        """Get a client by ID for a specific user."""
        result = await self.db.execute(
            select(Client).where(
                Client.id == client_id,
                Client.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: int, data: ClientCreate) -> Client:
        """Create a new client."""
        client = Client(
            user_id=user_id,
            **data.model_dump()
        )
        self.db.add(client)
        await self.db.flush()
        await self.db.refresh(client)
        return client

    async def update(
        self,
        user_id: int,
        client_id: int,
        data: ClientUpdate
    ) -> Optional[Client]:
        """Update a client."""
        client = await self.get_by_id(user_id, client_id)
        if not client:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(client, field, value)

        client.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(client)
        return client

    async def delete(self, user_id: int, client_id: int) -> bool:
        """Delete a client. Returns False when the user has no such client."""
        result = await self.db.execute(
            delete(Client).where(
                Client.id == client_id,
                Client.user_id == user_id
            )
        )
        await self.db.flush()
        return result.rowcount > 0
