"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from post_backend.app.api.v1.endpoints import parcels, post_offices, clients, employees

router = APIRouter()

router.include_router(parcels.router)
router.include_router(post_offices.router)
router.include_router(clients.router)
router.include_router(employees.router)
