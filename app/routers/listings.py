"""
Market listing endpoints: spreadsheet upload and product lookup.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.core.dependencies import get_listing_service
from app.core.exceptions import APIError, SpreadsheetParseError
from app.schemas.product import ProductsResponse, UploadResponse
from app.services.listing_service import ListingService, describe

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Listings"])


def _require_market(market: Optional[str]) -> str:
    if not market:
        raise APIError(status.HTTP_400_BAD_REQUEST, "Market is required")
    return market


@router.post("/upload", response_model=UploadResponse)
async def upload_listing(
    market: Optional[str] = Query(None, description="Market identifier"),
    location: Optional[str] = Query(None, description="Optional location within the market"),
    file: Optional[UploadFile] = File(None),
    service: ListingService = Depends(get_listing_service),
):
    """
    Upload or replace the price list of a market (and optional location).

    The spreadsheet is stored, parsed and becomes the listing served by
    GET /products for the same market/location.

    Raises:
        APIError 400: If market or file is missing
        APIError 500: If the spreadsheet cannot be parsed
    """
    market = _require_market(market)
    location = location or None
    if file is None:
        raise APIError(status.HTTP_400_BAD_REQUEST, "File not provided or upload failed")

    try:
        entry = await service.upload(market, location, file.filename, file.file)
    except SpreadsheetParseError as e:
        logger.error(f"Upload error for {describe(market, location)}: {e}")
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to process file",
            details=str(e),
        )
    finally:
        await file.close()

    return UploadResponse(
        message=f"Products for {describe(market, location)} updated successfully",
        products=entry.products,
        update_info=entry.update_info,
    )


@router.get("/products", response_model=ProductsResponse)
async def get_products(
    market: Optional[str] = Query(None, description="Market identifier"),
    location: Optional[str] = Query(None, description="Optional location within the market"),
    service: ListingService = Depends(get_listing_service),
):
    """
    Get the latest products of a market (and optional location).

    An unknown market/location returns an empty product list.

    Raises:
        APIError 400: If market is missing
        APIError 500: If the stored spreadsheet cannot be parsed
    """
    market = _require_market(market)

    try:
        entry = await service.lookup(market, location or None)
    except SpreadsheetParseError as e:
        raise APIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to load stored file",
            details=str(e),
        )

    return ProductsResponse(products=entry.products, update_info=entry.update_info)
