"""
Schemas for the application.

This module exports all Pydantic models and schemas used for request/response validation.
"""

from app.schemas.product import (
    CamelModel,
    Product,
    UpdateInfo,
    MarketEntry,
    ProductsResponse,
    UploadResponse,
)

from app.schemas.login import (
    LoginAuth,
    LoginAuthResponse,
    LogoutResponse,
    SessionStatus,
    SessionRecord,
)

from app.schemas.market import MarketDescriptor

__all__ = [
    # Product schemas
    "CamelModel",
    "Product",
    "UpdateInfo",
    "MarketEntry",
    "ProductsResponse",
    "UploadResponse",
    # Login schemas
    "LoginAuth",
    "LoginAuthResponse",
    "LogoutResponse",
    "SessionStatus",
    "SessionRecord",
    # Market schemas
    "MarketDescriptor",
]
