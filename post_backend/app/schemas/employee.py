"""
Employee Pydantic schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from post_backend.app.models.enums import EmployeePosition


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    position: EmployeePosition
    post_office_id: int = Field(..., ge=1)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee. All fields are required."""
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    position: EmployeePosition
    post_office_id: int = Field(..., ge=1)


class EmployeeResponse(BaseModel):
    """Schema for employee response."""
    id: int
    first_name: str
    last_name: str
    position: EmployeePosition
    post_office_id: int
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Schema for paginated employee list."""
    employees: List[EmployeeResponse]
    total: int
    page: int
    page_size: int
