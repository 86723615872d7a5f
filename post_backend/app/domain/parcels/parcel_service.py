"""
Parcel Service (Domain Logic).

Owns parcel creation and status changes. Every mutating operation writes the
parcel and its audit entry in one transaction: intermediate writes are
flushed, a single commit happens at the end, and any failure rolls the
session back before the error propagates.

Status flow:
    CREATED → IN_TRANSIT → DELIVERED
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from post_backend.app.core.exceptions import (
    ResourceNotFoundError,
    InvalidStateTransitionError,
    ValidationFailedError,
)
from post_backend.app.core.generators import TrackingNumberGenerator, uuid_tracking_number
from post_backend.app.core.pagination import PageParams
from post_backend.app.domain.pricing.price_calculator import PriceCalculatorRegistry
from post_backend.app.models.client import Client
from post_backend.app.models.enums import EmployeePosition
from post_backend.app.models.parcel import Parcel
from post_backend.app.models.parcel_enums import ParcelStatus, DeliveryType, ParcelLogAction
from post_backend.app.models.parcel_log_entry import ParcelLogEntry
from post_backend.app.models.post_office import PostOffice
from post_backend.app.schemas.parcel import ParcelCreate, ParcelSearchParams, ParcelStatistic
from post_backend.app.services.analytics import AnalyticsService
from post_backend.app.services.audit import log_parcel_action, get_parcel_history
from post_backend.app.services.search import parcel_predicate

logger = logging.getLogger(__name__)

_LIFECYCLE_ORDER = {
    ParcelStatus.CREATED: 0,
    ParcelStatus.IN_TRANSIT: 1,
    ParcelStatus.DELIVERED: 2,
}

# Statuses a parcel can be sent from
_SENDABLE = (ParcelStatus.CREATED, ParcelStatus.IN_TRANSIT)


class ParcelService:
    """
    Parcel lifecycle operations bound to one database session.

    Collaborators are passed in explicitly so tests can swap the tariff table
    or the tracking number generator.
    """

    def __init__(
        self,
        db: AsyncSession,
        price_calculators: PriceCalculatorRegistry,
        generate_tracking_number: TrackingNumberGenerator = uuid_tracking_number,
        audit_position: EmployeePosition = EmployeePosition.CLERK,
    ):
        self.db = db
        self.price_calculators = price_calculators
        self.generate_tracking_number = generate_tracking_number
        self.audit_position = audit_position

    # --- Reads ---

    async def get_by_tracking_number(self, tracking_number: str) -> Parcel:
        """
        Raises:
            ResourceNotFoundError: If no parcel has this tracking number.
        """
        result = await self.db.execute(
            select(Parcel).where(Parcel.tracking_number == tracking_number)
        )
        parcel = result.scalar_one_or_none()
        if parcel is None:
            raise ResourceNotFoundError("Parcel", tracking_number, field="tracking number")
        return parcel

    async def find_all(
        self, params: ParcelSearchParams, paging: PageParams
    ) -> Tuple[List[Parcel], int]:
        """Return one page of matching parcels (ordered by ID) and the total match count."""
        predicate = parcel_predicate(params)

        total = (await self.db.execute(
            select(func.count(Parcel.id)).where(predicate)
        )).scalar() or 0

        result = await self.db.execute(
            select(Parcel).where(predicate).order_by(Parcel.id).offset(paging.offset).limit(paging.page_size)
        )
        return list(result.scalars().all()), total

    async def build_statistic(self, params: ParcelSearchParams) -> ParcelStatistic:
        logger.info("Building statistics for parcels with params: %s", params.model_dump(exclude_defaults=True))
        return await AnalyticsService.get_parcel_statistic(self.db, params)

    async def get_history(self, tracking_number: str) -> List[ParcelLogEntry]:
        parcel = await self.get_by_tracking_number(tracking_number)
        return await get_parcel_history(self.db, parcel.id)

    # --- Writes ---

    async def create(self, data: ParcelCreate) -> Parcel:
        """
        Create a parcel and log its reception at the origin post office.

        Flow:
        1. Validate input
        2. Resolve origin/destination post offices and sender/recipient clients
        3. Resolve delivery tier (DEFAULT when omitted) and compute the price
        4. Persist the parcel in CREATED status
        5. Append a RECEIVED entry at the origin post office
        6. Commit both writes together

        Raises:
            ValidationFailedError: If weight is missing or not positive.
            ResourceNotFoundError: If a referenced record, the tariff or the
                audit employee is missing.
        """
        if data.weight is None or data.weight <= 0:
            raise ValidationFailedError("weight", "must be greater than 0")
        if data.parcel_description is None:
            raise ValidationFailedError("parcel_description", "is required")

        logger.info(
            "Creating new parcel for sender: %s, recipient: %s from post office %s to post office %s",
            data.sender_client_id, data.recipient_client_id,
            data.origin_post_office_id, data.destination_post_office_id
        )

        origin = await self._require(PostOffice, data.origin_post_office_id, "Origin Post Office")
        destination = await self._require(PostOffice, data.destination_post_office_id, "Destination Post Office")
        sender = await self._require(Client, data.sender_client_id, "Sender Client")
        recipient = await self._require(Client, data.recipient_client_id, "Recipient Client")

        delivery_type = data.delivery_type or DeliveryType.DEFAULT
        price = self.price_calculators.calculate(delivery_type, data.weight)

        parcel = Parcel(
            tracking_number=self.generate_tracking_number(),
            sender_client_id=sender.id,
            recipient_client_id=recipient.id,
            weight=data.weight,
            price=price,
            status=ParcelStatus.CREATED,
            delivery_type=delivery_type,
            parcel_description=data.parcel_description,
            origin_post_office_id=origin.id,
            destination_post_office_id=destination.id
        )

        try:
            self.db.add(parcel)
            await self.db.flush()
            await log_parcel_action(
                self.db, parcel, ParcelLogAction.RECEIVED, self.audit_position, origin.id
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(parcel)
        logger.info("Parcel created successfully with tracking number: %s", parcel.tracking_number)
        return parcel

    async def update_status(self, tracking_number: str, status: ParcelStatus) -> Parcel:
        """
        Set a parcel status directly.

        IN_TRANSIT logs a SENT entry at the origin, DELIVERED logs a DELIVERED
        entry at the destination, anything else logs nothing. No transition
        check is made here: skipped or reversed steps are only reported as a
        warning. Use ``send`` for the checked dispatch path.
        """
        try:
            status = ParcelStatus(status)
        except ValueError:
            raise ValidationFailedError("status", f"unknown parcel status {status!r}")

        logger.info("Updating status for parcel with tracking number %s to %s", tracking_number, status.value)
        parcel = await self.get_by_tracking_number(tracking_number)
        previous = parcel.status

        if _LIFECYCLE_ORDER[status] - _LIFECYCLE_ORDER[previous] not in (0, 1):
            logger.warning(
                "Parcel %s moved from %s to %s outside the normal lifecycle; "
                "no entries are written for skipped steps",
                tracking_number, previous.value, status.value
            )

        try:
            parcel.status = status
            await self.db.flush()

            if status == ParcelStatus.IN_TRANSIT:
                await log_parcel_action(
                    self.db, parcel, ParcelLogAction.SENT, self.audit_position, parcel.origin_post_office_id
                )
            elif status == ParcelStatus.DELIVERED:
                await log_parcel_action(
                    self.db, parcel, ParcelLogAction.DELIVERED, self.audit_position, parcel.destination_post_office_id
                )

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(parcel)
        return parcel

    async def send(self, tracking_number: str) -> Parcel:
        """
        Dispatch a parcel from its origin post office.

        CREATED moves to IN_TRANSIT. A parcel already IN_TRANSIT keeps its
        status but the dispatch is still logged. Either way one SENT entry is
        appended.

        Raises:
            InvalidStateTransitionError: If the parcel is in any other status.
        """
        logger.info("Sending parcel with tracking number: %s", tracking_number)
        parcel = await self.get_by_tracking_number(tracking_number)

        if parcel.status not in _SENDABLE:
            raise InvalidStateTransitionError(tracking_number, parcel.status, "sent")

        try:
            if parcel.status == ParcelStatus.CREATED:
                parcel.status = ParcelStatus.IN_TRANSIT
                await self.db.flush()

            await log_parcel_action(
                self.db, parcel, ParcelLogAction.SENT, self.audit_position, parcel.origin_post_office_id
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(parcel)
        return parcel

    async def _require(self, model, record_id: Optional[int], label: str):
        if record_id is None:
            raise ValidationFailedError(label.lower().replace(" ", "_") + "_id", "is required")
        record = await self.db.get(model, record_id)
        if record is None:
            raise ResourceNotFoundError(label, record_id)
        return record
