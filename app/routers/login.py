"""
Admin Login API endpoints.

This module provides session-based authentication for the admin panel.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.core.auth import authenticate, require_session, session_id_from_request
from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_session_store
from app.core.exceptions import APIError
from app.schemas.login import (
    LoginAuth,
    LoginAuthResponse,
    LogoutResponse,
    SessionRecord,
    SessionStatus,
)
from app.services.session_store import SessionStore

router = APIRouter(tags=["Admin Login"])


@router.post("/admin/login", response_model=LoginAuthResponse)
@router.post("/api/admin/login", response_model=LoginAuthResponse, include_in_schema=False)
def login_admin(
    login_data: LoginAuth,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    store: SessionStore = Depends(get_session_store),
):
    """
    Authenticate the admin and open a session.

    The session id is returned in the body and set as an httponly cookie.

    Raises:
        APIError 401: If credentials are invalid
    """
    if not authenticate(login_data.username, login_data.password, settings):
        raise APIError(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    session_id = store.create_session(login_data.username)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )

    return LoginAuthResponse(success=True, session_id=session_id)


@router.post("/admin/logout", response_model=LogoutResponse)
def logout_admin(
    response: Response,
    session_id: Optional[str] = Depends(session_id_from_request),
    settings: Settings = Depends(get_app_settings),
    store: SessionStore = Depends(get_session_store),
):
    """
    Close the caller's session.

    Returns:
        success=False when there was no session to close
    """
    destroyed = store.destroy_session(session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return LogoutResponse(success=destroyed)


@router.get("/admin/session", response_model=SessionStatus)
def get_admin_session(session: SessionRecord = Depends(require_session)):
    """
    Report whether the caller's session is still valid.

    Raises:
        APIError 401: If the session is missing or expired
    """
    return SessionStatus(valid=True, username=session.username, expires_at=session.expires_at)
