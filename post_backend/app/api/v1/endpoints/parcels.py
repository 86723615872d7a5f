"""
Parcel API Endpoints.

Creation, lookup, search, statistics and status changes for parcels.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path, status

from post_backend.app.core.dependencies import get_parcel_service
from post_backend.app.core.pagination import PageParams, page_params
from post_backend.app.domain.parcels.parcel_service import ParcelService
from post_backend.app.models.parcel_enums import ParcelStatus, DeliveryType, ParcelDescription
from post_backend.app.schemas.parcel import (
    ParcelCreate, ParcelStatusUpdate, ParcelSearchParams, ParcelResponse,
    ParcelListResponse, ParcelStatistic, ParcelLogEntryResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parcels", tags=["Parcels"])


def parcel_search_params(
    tracking_number: Optional[str] = Query(None, description="Exact tracking number"),
    sender_client_id: Optional[int] = Query(None),
    recipient_client_id: Optional[int] = Query(None),
    from_weight: Optional[float] = Query(None, description="Minimum weight (inclusive)"),
    to_weight: Optional[float] = Query(None, description="Maximum weight (inclusive)"),
    from_price: Optional[float] = Query(None, description="Minimum price (inclusive)"),
    to_price: Optional[float] = Query(None, description="Maximum price (inclusive)"),
    statuses: List[ParcelStatus] = Query(default=[]),
    delivery_types: List[DeliveryType] = Query(default=[]),
    parcel_descriptions: List[ParcelDescription] = Query(default=[]),
    origin_post_office_id: Optional[int] = Query(None),
    destination_post_office_id: Optional[int] = Query(None),
) -> ParcelSearchParams:
    """Collect parcel search criteria from the query string."""
    return ParcelSearchParams(
        tracking_number=tracking_number,
        sender_client_id=sender_client_id,
        recipient_client_id=recipient_client_id,
        from_weight=from_weight,
        to_weight=to_weight,
        from_price=from_price,
        to_price=to_price,
        statuses=statuses,
        delivery_types=delivery_types,
        parcel_descriptions=parcel_descriptions,
        origin_post_office_id=origin_post_office_id,
        destination_post_office_id=destination_post_office_id,
    )


@router.post("", response_model=ParcelResponse, status_code=status.HTTP_201_CREATED)
async def create_parcel(
    parcel_data: ParcelCreate,
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Create a new parcel.
    
    Validates:
    - Origin and destination post offices exist
    - Sender and recipient clients exist
    
    Price is computed from weight and delivery tier. A RECEIVED entry is
    logged at the origin post office.
    """
    parcel = await service.create(parcel_data)
    return ParcelResponse.model_validate(parcel)


@router.get("", response_model=ParcelListResponse)
async def list_parcels(
    params: ParcelSearchParams = Depends(parcel_search_params),
    paging: PageParams = Depends(page_params),
    service: ParcelService = Depends(get_parcel_service)
):
    """List parcels matching the search criteria, one page at a time."""
    logger.info("Received request to find parcels with params: %s", params.model_dump(exclude_defaults=True))
    parcels, total = await service.find_all(params, paging)
    
    return ParcelListResponse(
        parcels=[ParcelResponse.model_validate(p) for p in parcels],
        total=total,
        page=paging.page,
        page_size=paging.page_size
    )


@router.get("/statistic", response_model=ParcelStatistic)
async def get_parcel_statistic(
    params: ParcelSearchParams = Depends(parcel_search_params),
    service: ParcelService = Depends(get_parcel_service)
):
    """Aggregate statistics over every parcel matching the search criteria."""
    return await service.build_statistic(params)


@router.get("/{tracking_number}", response_model=ParcelResponse)
async def get_parcel(
    tracking_number: str = Path(..., description="Parcel tracking number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Get a parcel by tracking number."""
    parcel = await service.get_by_tracking_number(tracking_number)
    return ParcelResponse.model_validate(parcel)


@router.patch("/{tracking_number}", response_model=ParcelResponse)
async def update_parcel_status(
    status_data: ParcelStatusUpdate,
    tracking_number: str = Path(..., description="Parcel tracking number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Set the parcel status directly.
    
    IN_TRANSIT logs a SENT entry, DELIVERED logs a DELIVERED entry.
    Transitions are not checked on this path.
    """
    parcel = await service.update_status(tracking_number, status_data.status)
    return ParcelResponse.model_validate(parcel)


@router.post("/{tracking_number}/send", response_model=ParcelResponse)
async def send_parcel(
    tracking_number: str = Path(..., description="Parcel tracking number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Dispatch a parcel.
    
    Allowed from CREATED (moves to IN_TRANSIT) and IN_TRANSIT (logged again,
    status unchanged). Returns 409 from any other status.
    """
    parcel = await service.send(tracking_number)
    return ParcelResponse.model_validate(parcel)


@router.get("/{tracking_number}/history", response_model=List[ParcelLogEntryResponse])
async def get_parcel_history(
    tracking_number: str = Path(..., description="Parcel tracking number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Handling events of a parcel, oldest first."""
    entries = await service.get_history(tracking_number)
    return [ParcelLogEntryResponse.model_validate(entry) for entry in entries]
