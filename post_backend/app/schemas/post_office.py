"""
Post office Pydantic schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class PostOfficeCreate(BaseModel):
    """Schema for creating or fully replacing a post office."""
    name: str = Field(..., min_length=1, max_length=255, description="Post office name")
    city: str = Field(..., min_length=1, max_length=80)
    postcode: str = Field(..., min_length=1, max_length=10)
    street: str = Field(..., min_length=1, max_length=255)


class PostOfficeSearchParams(BaseModel):
    """Case-insensitive substring filters; blank values are ignored."""
    name: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    street: Optional[str] = None


class PostOfficeResponse(BaseModel):
    """Schema for post office response."""
    id: int
    name: str
    city: str
    postcode: str
    street: str
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class PostOfficeSummary(BaseModel):
    """Post office details embedded in parcel responses."""
    id: int
    name: str
    city: str
    postcode: str
    street: str
    
    class Config:
        from_attributes = True


class PostOfficeListResponse(BaseModel):
    """Schema for paginated post office list."""
    post_offices: List[PostOfficeResponse]
    total: int
    page: int
    page_size: int
