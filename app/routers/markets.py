"""
Markets endpoint.
"""

from typing import List

from fastapi import APIRouter

from app.core.markets import MARKETS
from app.schemas.market import MarketDescriptor

router = APIRouter(prefix="/markets", tags=["Markets"])


@router.get("", response_model=List[MarketDescriptor], response_model_exclude_none=True)
def get_markets():
    """List the markets shown in the frontend."""
    return MARKETS
