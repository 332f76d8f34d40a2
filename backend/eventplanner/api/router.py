"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from eventplanner.api.routes import events, guests, vendors
from eventplanner.core.config import get_settings

api_router = APIRouter(prefix=get_settings().API_PREFIX)
api_router.include_router(events.router)
api_router.include_router(guests.router)
api_router.include_router(vendors.router)
