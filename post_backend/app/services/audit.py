"""
Parcel audit trail service.

Appends handling events (received, sent, delivered) for parcels and reads
them back. There is deliberately no update or delete path: entries are
write-once.
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from post_backend.app.core.exceptions import ResourceNotFoundError
from post_backend.app.models.employee import Employee
from post_backend.app.models.enums import EmployeePosition
from post_backend.app.models.parcel import Parcel
from post_backend.app.models.parcel_enums import ParcelLogAction
from post_backend.app.models.parcel_log_entry import ParcelLogEntry
from post_backend.app.models.post_office import PostOffice

logger = logging.getLogger(__name__)


async def find_first_employee_by_position(db: AsyncSession, position: EmployeePosition) -> Employee:
    """
    Resolve the employee credited for an action.
    
    Picks the employee with the lowest ID holding ``position``, regardless of
    the post office where the action happens.
    
    Raises:
        ResourceNotFoundError: If nobody holds the position.
    """
    result = await db.execute(
        select(Employee).where(Employee.position == position).order_by(Employee.id).limit(1)
    )
    employee = result.scalar_one_or_none()
    if employee is None:
        raise ResourceNotFoundError("Employee", position.value, field="position")
    return employee


async def log_parcel_action(
    db: AsyncSession,
    parcel: Parcel,
    action: ParcelLogAction,
    position: EmployeePosition,
    post_office_id: int
) -> ParcelLogEntry:
    """
    Append one handling event for a parcel.
    
    The entry is flushed but not committed; the caller owns the transaction so
    the parcel change and its entry become visible together.
    
    Args:
        db: Database session
        parcel: Parcel being handled (must already have an ID)
        action: Handling event kind
        position: Employee position credited with the action
        post_office_id: Post office where the action happened
        
    Returns:
        Created ParcelLogEntry instance
        
    Raises:
        ResourceNotFoundError: If the employee or post office cannot be resolved.
    """
    employee = await find_first_employee_by_position(db, position)
    
    post_office = await db.get(PostOffice, post_office_id)
    if post_office is None:
        raise ResourceNotFoundError("Post Office", post_office_id)
    
    log_entry = ParcelLogEntry(
        action_type=action,
        parcel_id=parcel.id,
        employee_id=employee.id,
        post_office_id=post_office.id
    )
    
    db.add(log_entry)
    await db.flush()
    
    logger.info(
        "Logged action '%s' for parcel '%s' by employee %s (%s) at post office %s",
        action.value, parcel.tracking_number, employee.id, position.value, post_office.id
    )
    return log_entry


async def get_parcel_history(db: AsyncSession, parcel_id: int) -> List[ParcelLogEntry]:
    """
    Get the handling events of one parcel, oldest first.
    """
    query = select(ParcelLogEntry).where(
        ParcelLogEntry.parcel_id == parcel_id
    ).order_by(ParcelLogEntry.timestamp, ParcelLogEntry.id)
    
    result = await db.execute(query)
    return list(result.scalars().all())
