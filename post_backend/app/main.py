"""
FastAPI Application Entry Point.

This is the main application file for the Post Parcel Tracking Backend.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from post_backend.app.core.config import settings
from post_backend.app.core.logging import configure_logging
from post_backend.app.core.observability import ObservabilityMiddleware
from post_backend.app.core.generators import uuid_tracking_number
from post_backend.app.api.v1.router import router as api_v1_router
from post_backend.app.db.session import engine, Base
from post_backend.app.domain.pricing.price_calculator import PriceCalculatorRegistry
from post_backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from post_backend.app.models.post_office import PostOffice
from post_backend.app.models.client import Client
from post_backend.app.models.employee import Employee
from post_backend.app.models.parcel import Parcel
from post_backend.app.models.parcel_log_entry import ParcelLogEntry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.
    
    Creates database tables on startup and disposes the engine on shutdown.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Build the application with its collaborators, handlers and routes."""
    configure_logging(settings.log_level, settings.log_json)
    
    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        debug=settings.debug,
        description="Parcel tracking between post offices: pricing, lifecycle, audit trail and statistics",
        lifespan=lifespan,
    )
    
    # Application-level collaborators, handed to services per request
    app.state.price_calculators = PriceCalculatorRegistry()
    app.state.tracking_number_generator = uuid_tracking_number
    
    app.add_middleware(ObservabilityMiddleware)
    
    # Register global exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    
    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        
        Returns:
            dict: Status and application information
        """
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "version": settings.api_version,
        }
    
    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint.
        
        Returns:
            dict: Welcome message and API documentation links
        """
        return {
            "message": "Welcome to Post Parcel Tracking Backend API",
            "docs": "/docs",
            "health": "/health",
        }
    
    app.include_router(api_v1_router, prefix=f"/{settings.api_version}")
    return app


app = create_app()
