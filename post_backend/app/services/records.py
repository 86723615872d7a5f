"""
Record store helpers shared by the reference-data endpoints.
"""

import logging
from typing import Any, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from post_backend.app.core.exceptions import ResourceNotFoundError, ResourceInUseError

logger = logging.getLogger(__name__)


async def get_or_404(db: AsyncSession, model: Type[Any], record_id: int, label: str):
    """
    Fetch a record by primary key.
    
    Raises:
        ResourceNotFoundError: If the record does not exist.
    """
    record = await db.get(model, record_id)
    if record is None:
        raise ResourceNotFoundError(label, record_id)
    return record


async def delete_record(db: AsyncSession, model: Type[Any], record_id: int, label: str) -> None:
    """
    Delete a record by primary key.
    
    Raises:
        ResourceNotFoundError: If the record does not exist.
        ResourceInUseError: If other records still reference it.
    """
    record = await get_or_404(db, model, record_id, label)
    try:
        await db.delete(record)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ResourceInUseError(label, record_id)
    logger.info("%s with ID %s deleted", label, record_id)
