"""
Market descriptor schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class MarketDescriptor(BaseModel):
    """A market shown in the frontend's market picker"""
    name: str = Field(..., description="Market identifier, used as the upload key")
    locations: Optional[List[str]] = Field(None, description="Sites under this market, if any")
