"""
Pydantic schemas for the admin login.

These schemas are used for request/response validation.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class LoginAuth(BaseModel):
    """Schema for admin login request."""
    username: str = Field("", description="Admin username")
    password: str = Field("", description="Plain text password")


class LoginAuthResponse(BaseModel):
    """Schema for admin login response."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    session_id: str


class LogoutResponse(BaseModel):
    """Schema for admin logout response."""
    success: bool


class SessionStatus(BaseModel):
    """Schema describing the caller's current session."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool = True
    username: str
    expires_at: datetime


class SessionRecord(BaseModel):
    """
    Persisted admin session.

    Stored as one JSON object per file, named by session id, with the keys
    ``username``, ``createdAt`` and ``expiresAt``.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    created_at: datetime
    expires_at: datetime

    @field_validator("created_at", "expires_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Timestamps without an offset are treated as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
