"""
Client API Endpoints.

CRUD for parcel senders and recipients.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from post_backend.app.db.session import get_db
from post_backend.app.models.client import Client
from post_backend.app.schemas.client import ClientCreate, ClientResponse
from post_backend.app.services.records import get_or_404, delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new client."""
    logger.info("Creating new client: %s %s", client_data.first_name, client_data.last_name)
    client = Client(**client_data.model_dump())
    
    db.add(client)
    await db.commit()
    await db.refresh(client)
    
    return ClientResponse.model_validate(client)


@router.get("", response_model=List[ClientResponse])
async def list_clients(db: AsyncSession = Depends(get_db)):
    """List every client."""
    result = await db.execute(select(Client).order_by(Client.id))
    return [ClientResponse.model_validate(c) for c in result.scalars().all()]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int = Path(..., description="Client ID"),
    db: AsyncSession = Depends(get_db)
):
    client = await get_or_404(db, Client, client_id, "Client")
    return ClientResponse.model_validate(client)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_data: ClientCreate,
    client_id: int = Path(..., description="Client ID"),
    db: AsyncSession = Depends(get_db)
):
    """Replace every field of a client."""
    client = await get_or_404(db, Client, client_id, "Client")
    
    for field, value in client_data.model_dump().items():
        setattr(client, field, value)
    
    await db.commit()
    await db.refresh(client)
    
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int = Path(..., description="Client ID"),
    db: AsyncSession = Depends(get_db)
):
    await delete_record(db, Client, client_id, "Client")
