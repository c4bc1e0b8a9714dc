"""
Pydantic schemas for parsed product listings.

Field names are snake_case in Python and camelCase on the wire
(``prodazhna_cena`` <-> ``prodazhnaCena``), matching what the frontend reads.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising fields with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Product Schemas
# ============================================================================

class Product(CamelModel):
    """
    One product row of a market price list.

    Columns A..I of the spreadsheet, in order. All values are kept as text
    exactly as displayed in the sheet.
    """
    naziv: str = Field("", description="Product name")
    prodazhna_cena: str = Field("", description="Sale price")
    edinichna_cena: str = Field("", description="Unit price")
    opis: str = Field("", description="Description")
    dostapnost: str = Field("", description="Availability")
    redovna_cena: str = Field("", description="Regular price")
    cena_so_popust: str = Field("", description="Discounted price")
    vid_na_popust: str = Field("", description="Discount type")
    vremetraenje_na_popust: str = Field("", description="Discount duration")


class UpdateInfo(CamelModel):
    """Display-only date/time read from the spreadsheet header cells."""
    date: str = ""
    time: str = ""
    formatted: str = ""


class MarketEntry(CamelModel):
    """Latest parsed listing for one (market, location) key."""
    products: List[Product] = Field(default_factory=list)
    file_name: Optional[str] = None
    update_info: UpdateInfo = Field(default_factory=UpdateInfo)


# ============================================================================
# Response Schemas
# ============================================================================

class ProductsResponse(CamelModel):
    """Response for GET /products"""
    products: List[Product]
    update_info: UpdateInfo


class UploadResponse(CamelModel):
    """Response for POST /upload"""
    message: str
    products: List[Product]
    update_info: Optional[UpdateInfo] = None
