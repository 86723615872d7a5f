"""
Employee API Endpoints.

CRUD for post office staff, plus listing by post office.
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from post_backend.app.core.pagination import PageParams, page_params
from post_backend.app.db.session import get_db
from post_backend.app.models.employee import Employee
from post_backend.app.models.post_office import PostOffice
from post_backend.app.schemas.employee import (
    EmployeeCreate, EmployeeUpdate, EmployeeResponse, EmployeeListResponse
)
from post_backend.app.services.records import get_or_404, delete_record

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


async def _paginate(db: AsyncSession, paging: PageParams, *criteria) -> EmployeeListResponse:
    total = (await db.execute(
        select(func.count(Employee.id)).where(*criteria)
    )).scalar() or 0
    
    result = await db.execute(
        select(Employee).where(*criteria).order_by(Employee.id)
        .offset(paging.offset).limit(paging.page_size)
    )
    employees = [EmployeeResponse.model_validate(e) for e in result.scalars().all()]
    logger.info("Fetched %s employees on page %s", len(employees), paging.page)
    
    return EmployeeListResponse(
        employees=employees,
        total=total,
        page=paging.page,
        page_size=paging.page_size
    )


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_data: EmployeeCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new employee.
    
    Validates:
    - Post office exists
    """
    await get_or_404(db, PostOffice, employee_data.post_office_id, "Post Office")
    
    employee = Employee(**employee_data.model_dump())
    db.add(employee)
    await db.commit()
    await db.refresh(employee)
    
    logger.info("Employee created successfully with ID: %s", employee.id)
    return EmployeeResponse.model_validate(employee)


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    return await _paginate(db, paging)


@router.get("/by-post-office/{post_office_id}", response_model=EmployeeListResponse)
async def list_post_office_employees(
    post_office_id: int = Path(..., description="Post office ID"),
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """List employees assigned to one post office."""
    return await _paginate(db, paging, Employee.post_office_id == post_office_id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_db)
):
    employee = await get_or_404(db, Employee, employee_id, "Employee")
    return EmployeeResponse.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_data: EmployeeUpdate,
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Update an employee.
    
    The post office is only re-resolved when it changes.
    """
    employee = await get_or_404(db, Employee, employee_id, "Employee")
    
    if employee_data.post_office_id != employee.post_office_id:
        await get_or_404(db, PostOffice, employee_data.post_office_id, "Post Office")
    
    for field, value in employee_data.model_dump().items():
        setattr(employee, field, value)
    
    await db.commit()
    await db.refresh(employee)
    
    return EmployeeResponse.model_validate(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: int = Path(..., description="Employee ID"),
    db: AsyncSession = Depends(get_db)
):
    await delete_record(db, Employee, employee_id, "Employee")
