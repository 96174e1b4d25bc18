"""
Client business logic service.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models.client import Client
from app.schemas.client import ClientCreate, ClientUpdate
from app.repositories.client_repository import ClientRepository


class ClientService:
    """Service for client business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = ClientRepository(db)

    async def list_clients(self, user_id: int) -> List[Client]:
        """List the user's clients."""
        return await self.repository.list(user_id)

    async def get_client(self, user_id: int, client_id: int) -> Client:
        """Get a client owned by the user."""
        client = await self.repository.get_by_id(user_id, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def create_client(self, user_id: int, data: ClientCreate) -> Client:
        """Create a new client for the user."""
        return await self.repository.create(user_id, data)

    async def update_client(self, user_id: int, client_id: int, data: ClientUpdate) -> Client:
        """Update a client owned by the user."""
        client = await self.repository.update(user_id, client_id, data)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def delete_client(self, user_id: int, client_id: int) -> None:
        """Delete a client owned by the user."""
        if not await self.repository.delete(user_id, client_id):
            raise NotFoundError("Client not found")
