"""
Service dependencies for FastAPI.

Builds request-scoped services from the application-level collaborators kept
on ``app.state`` (set up in ``main.create_app``).
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from post_backend.app.core.config import settings
from post_backend.app.db.session import get_db
from post_backend.app.domain.parcels.parcel_service import ParcelService
from post_backend.app.domain.pricing.price_calculator import PriceCalculatorRegistry


def get_price_calculators(request: Request) -> PriceCalculatorRegistry:
    """Tariff table shared by every request."""
    return request.app.state.price_calculators


def get_tracking_number_generator(request: Request):
    return request.app.state.tracking_number_generator


async def get_parcel_service(
    db: AsyncSession = Depends(get_db),
    price_calculators: PriceCalculatorRegistry = Depends(get_price_calculators),
    generate_tracking_number=Depends(get_tracking_number_generator),
) -> ParcelService:
    """
    FastAPI dependency for the parcel lifecycle service.
    
    One service per request, bound to the request's database session.
    """
    return ParcelService(
        db=db,
        price_calculators=price_calculators,
        generate_tracking_number=generate_tracking_number,
        audit_position=settings.audit_actor_position,
    )
