"""
Request dependencies exposing the stores owned by the running application.

The stores are created in the application lifespan (see main.py) and kept on
``app.state``.
"""

from fastapi import Request

from app.core.config import Settings
from app.services.listing_service import ListingService
from app.services.session_store import SessionStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_listing_service(request: Request) -> ListingService:
    return request.app.state.listing_service
