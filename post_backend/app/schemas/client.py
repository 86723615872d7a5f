"""
Client Pydantic schemas.
"""

from pydantic import BaseModel, Field, EmailStr
from datetime import datetime


class ClientCreate(BaseModel):
    """Schema for creating or fully replacing a client."""
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    email: EmailStr = Field(..., max_length=255)
    phone: str = Field(..., max_length=20, pattern=r"^\+?[0-9]{10,15}$", description="e.g. +380991234567")


class ClientResponse(BaseModel):
    """Schema for client response."""
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
