"""
Client router - API endpoints for the caller's clients.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user import User
from app.schemas.base import CreatedResponse, SuccessResponse
from app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from app.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=List[ClientRead])
async def list_clients(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the caller's clients, newest first."""
    service = ClientService(db)
    return await service.list_clients(current_user.id)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a client by ID."""
    service = ClientService(db)
    return await service.get_client(current_user.id, client_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a new client."""
    service = ClientService(db)
    client = await service.create_client(current_user.id, data)
    await db.commit()
    return CreatedResponse(id=client.id)


@router.put("/{client_id}", response_model=SuccessResponse)
async def update_client(
    data: ClientUpdate,
    client_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update a client."""
    service = ClientService(db)
    await service.update_client(current_user.id, client_id, data)
    await db.commit()
    return SuccessResponse()


@router.delete("/{client_id}", response_model=SuccessResponse)
async def delete_client(
    client_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a client."""
    service = ClientService(db)
    await service.delete_client(current_user.id, client_id)
    await db.commit()
    return SuccessResponse()
