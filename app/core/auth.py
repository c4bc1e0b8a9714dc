"""
Authentication and Authorization utilities.
"""

import logging
import secrets
from typing import Optional, Tuple

import bcrypt
import pyotp
from fastapi import Depends, Header, Request, status

from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_session_store
from app.core.exceptions import APIError
from app.schemas.login import SessionRecord
from app.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify plain password against a stored bcrypt hash.

    Args:
        plain_password: Plain text password from the login form
        hashed_password: Bcrypt hash from configuration

    Returns:
        True if password matches hash, False otherwise (including malformed hashes)
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        return False


def get_password_hash(plain_password: str, rounds: int = 10) -> str:
    """
    Hash a plain password using Bcrypt.

    Bcrypt Algorithm Details:
    - Uses Blowfish cipher
    - Includes salt (automatically generated and stored in hash)
    - Format: $2b$[cost]$[22 character salt][31 character hash]

    Args:
        plain_password: Plain text password to hash
        rounds: Cost factor (2^rounds iterations)

    Returns:
        Bcrypt hash of the password
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(plain_password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def _same(supplied: str, expected: str) -> bool:
    return secrets.compare_digest(supplied.encode('utf-8'), expected.encode('utf-8'))


def authenticate(username: Optional[str], password: Optional[str], settings: Settings) -> bool:
    """
    Check admin credentials against the configured pair.

    The password is verified against ADMIN_PASSWORD_HASH when it is set,
    otherwise compared with ADMIN_PASSWORD.

    Returns:
        False when credentials are not configured or do not match exactly
    """
    valid_username = settings.ADMIN_USERNAME
    if not valid_username or not (settings.ADMIN_PASSWORD or settings.ADMIN_PASSWORD_HASH):
        logger.error("Missing ADMIN_USERNAME or ADMIN_PASSWORD in environment")
        return False

    if not username or not password:
        return False

    if not _same(username, valid_username):
        return False

    if settings.ADMIN_PASSWORD_HASH:
        return verify_password(password, settings.ADMIN_PASSWORD_HASH)
    return _same(password, settings.ADMIN_PASSWORD)


def generate_mfa_secret(label: str, issuer: Optional[str] = None) -> Tuple[str, str]:
    """
    Generate a TOTP secret for an authenticator app.

    Args:
        label: Account label shown in the authenticator
        issuer: Optional issuer name

    Returns:
        (base32 secret, otpauth:// provisioning URI)
    """
    secret = pyotp.random_base32()
    uri = pyotp.TOTP(secret).provisioning_uri(name=label, issuer_name=issuer)
    return secret, uri


def session_id_from_request(
    request: Request,
    x_session_id: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """Session id from the session cookie, falling back to the X-Session-Id header."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or x_session_id


def require_session(
    session_id: Optional[str] = Depends(session_id_from_request),
    store: SessionStore = Depends(get_session_store),
) -> SessionRecord:
    """
    Dependency returning the caller's live session.

    Raises:
        APIError 401: If the session is missing, unknown or expired
    """
    record = store.get_session(session_id)
    if record is None:
        raise APIError(status.HTTP_401_UNAUTHORIZED, "Session expired or invalid")
    return record
