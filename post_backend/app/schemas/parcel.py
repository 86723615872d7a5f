"""
Parcel Pydantic schemas.

Defines request, search and response models for parcel management.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List, Dict
from post_backend.app.models.parcel_enums import (
    ParcelStatus, DeliveryType, ParcelDescription, ParcelLogAction
)
from post_backend.app.schemas.post_office import PostOfficeSummary


class ParcelCreate(BaseModel):
    """Schema for creating a new parcel. Price is always computed, never supplied."""
    sender_client_id: int = Field(..., ge=1, description="Sender client ID")
    recipient_client_id: int = Field(..., ge=1, description="Recipient client ID")
    weight: float = Field(..., gt=0, description="Weight in kilograms")
    delivery_type: Optional[DeliveryType] = Field(None, description="Delivery tier, DEFAULT when omitted")
    parcel_description: ParcelDescription = Field(..., description="Content category")
    origin_post_office_id: int = Field(..., ge=1, description="Origin post office ID")
    destination_post_office_id: int = Field(..., ge=1, description="Destination post office ID")


class ParcelStatusUpdate(BaseModel):
    """Schema for setting a parcel status directly."""
    status: ParcelStatus


class ParcelSearchParams(BaseModel):
    """
    Optional parcel search criteria.
    
    Every field is optional; an absent (or blank/empty) field adds no constraint.
    """
    tracking_number: Optional[str] = None
    sender_client_id: Optional[int] = None
    recipient_client_id: Optional[int] = None
    from_weight: Optional[float] = None
    to_weight: Optional[float] = None
    from_price: Optional[float] = None
    to_price: Optional[float] = None
    statuses: List[ParcelStatus] = Field(default_factory=list)
    delivery_types: List[DeliveryType] = Field(default_factory=list)
    parcel_descriptions: List[ParcelDescription] = Field(default_factory=list)
    origin_post_office_id: Optional[int] = None
    destination_post_office_id: Optional[int] = None


class ParcelResponse(BaseModel):
    """Schema for parcel response."""
    id: int
    tracking_number: str
    sender_client_id: int
    recipient_client_id: int
    weight: float
    price: float
    status: ParcelStatus
    delivery_type: DeliveryType
    parcel_description: ParcelDescription
    origin_post_office_id: int
    destination_post_office_id: int
    origin_post_office: PostOfficeSummary
    destination_post_office: PostOfficeSummary
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class ParcelListResponse(BaseModel):
    """Schema for paginated parcel list."""
    parcels: List[ParcelResponse]
    total: int
    page: int
    page_size: int


class ParcelLogEntryResponse(BaseModel):
    """Schema for one parcel handling event."""
    id: int
    timestamp: datetime
    action_type: ParcelLogAction
    parcel_id: int
    employee_id: int
    post_office_id: int
    
    class Config:
        from_attributes = True


class ParcelStatistic(BaseModel):
    """Aggregate figures over a filtered set of parcels."""
    total_parcels: int
    average_weight: float
    average_price: float
    parcels_count_by_status: Dict[ParcelStatus, int]
    parcels_count_by_delivery_type: Dict[DeliveryType, int]
    parcels_count_by_description: Dict[ParcelDescription, int]
    most_expensive_parcel: Optional[ParcelResponse] = None
    cheapest_parcel: Optional[ParcelResponse] = None
    heaviest_parcel: Optional[ParcelResponse] = None
    lightest_parcel: Optional[ParcelResponse] = None
