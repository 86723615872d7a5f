"""
Post Office API Endpoints.

CRUD and substring search for post offices.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from post_backend.app.core.pagination import PageParams, page_params
from post_backend.app.db.session import get_db
from post_backend.app.models.post_office import PostOffice
from post_backend.app.schemas.post_office import (
    PostOfficeCreate, PostOfficeSearchParams, PostOfficeResponse, PostOfficeListResponse
)
from post_backend.app.services.records import get_or_404, delete_record
from post_backend.app.services.search import post_office_predicate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/post-offices", tags=["Post Offices"])


def post_office_search_params(
    name: Optional[str] = Query(None, description="Name contains (case-insensitive)"),
    city: Optional[str] = Query(None, description="City contains (case-insensitive)"),
    postcode: Optional[str] = Query(None, description="Postcode contains (case-insensitive)"),
    street: Optional[str] = Query(None, description="Street contains (case-insensitive)"),
) -> PostOfficeSearchParams:
    return PostOfficeSearchParams(name=name, city=city, postcode=postcode, street=street)


@router.post("", response_model=PostOfficeResponse, status_code=status.HTTP_201_CREATED)
async def create_post_office(
    post_office_data: PostOfficeCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new post office."""
    post_office = PostOffice(**post_office_data.model_dump())
    
    db.add(post_office)
    await db.commit()
    await db.refresh(post_office)
    
    logger.info("Post office created successfully with ID: %s", post_office.id)
    return PostOfficeResponse.model_validate(post_office)


@router.get("", response_model=PostOfficeListResponse)
async def list_post_offices(
    params: PostOfficeSearchParams = Depends(post_office_search_params),
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """Search post offices by name, city, postcode and street."""
    predicate = post_office_predicate(params)
    
    total = (await db.execute(
        select(func.count(PostOffice.id)).where(predicate)
    )).scalar() or 0
    
    result = await db.execute(
        select(PostOffice).where(predicate).order_by(PostOffice.id)
        .offset(paging.offset).limit(paging.page_size)
    )
    
    return PostOfficeListResponse(
        post_offices=[PostOfficeResponse.model_validate(p) for p in result.scalars().all()],
        total=total,
        page=paging.page,
        page_size=paging.page_size
    )


@router.get("/{post_office_id}", response_model=PostOfficeResponse)
async def get_post_office(
    post_office_id: int = Path(..., description="Post office ID"),
    db: AsyncSession = Depends(get_db)
):
    """Get a post office by ID."""
    post_office = await get_or_404(db, PostOffice, post_office_id, "Post Office")
    return PostOfficeResponse.model_validate(post_office)


@router.put("/{post_office_id}", response_model=PostOfficeResponse)
async def update_post_office(
    post_office_data: PostOfficeCreate,
    post_office_id: int = Path(..., description="Post office ID"),
    db: AsyncSession = Depends(get_db)
):
    """Replace every field of a post office."""
    post_office = await get_or_404(db, PostOffice, post_office_id, "Post Office")
    
    for field, value in post_office_data.model_dump().items():
        setattr(post_office, field, value)
    
    await db.commit()
    await db.refresh(post_office)
    
    return PostOfficeResponse.model_validate(post_office)


@router.delete("/{post_office_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post_office(
    post_office_id: int = Path(..., description="Post office ID"),
    db: AsyncSession = Depends(get_db)
):
    """Delete a post office that nothing references any more."""
    await delete_record(db, PostOffice, post_office_id, "Post Office")
