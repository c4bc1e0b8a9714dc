"""
API routers for the application.
"""

from fastapi import APIRouter
from app.routers import login, listings, markets

api_router = APIRouter()

# Include routers
api_router.include_router(login.router)  # Admin login & sessions
api_router.include_router(listings.router)  # Upload & product lookup
api_router.include_router(markets.router)  # Static market list

__all__ = ["api_router", "login", "listings", "markets"]
