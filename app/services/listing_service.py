"""
Upload and lookup of market price lists.

Ties together file storage, the spreadsheet parser and the in-memory index.
"""

import logging
from typing import BinaryIO, Optional

from starlette.concurrency import run_in_threadpool

from app.core.exceptions import SpreadsheetParseError
from app.schemas.product import MarketEntry
from app.services.market_files import MarketFileStorage
from app.services.product_index import ProductIndex
from app.services.spreadsheet_parser import parse_spreadsheet

logger = logging.getLogger(__name__)


def describe(market: str, location: Optional[str]) -> str:
    return market + (f" ({location})" if location else "")


class ListingService:
    """Upload handler and lookup handler for market listings"""

    def __init__(self, storage: MarketFileStorage, index: ProductIndex, date_format: str = "%d.%m.%Y"):
        self.storage = storage
        self.index = index
        self.date_format = date_format

    async def upload(
        self,
        market: str,
        location: Optional[str],
        filename: Optional[str],
        fileobj: BinaryIO,
    ) -> MarketEntry:
        """
        Store and parse a new spreadsheet for a market key.

        On success the stale files of the key are deleted and the cached
        entry is replaced. On a parse failure the new file is discarded and
        the previous file and cached entry are left as they were.

        Raises:
            SpreadsheetParseError: If the uploaded file cannot be parsed
        """
        async with self.index.lock(market, location):
            path = await run_in_threadpool(self.storage.save, market, location, filename, fileobj)

            try:
                listing = await run_in_threadpool(parse_spreadsheet, path, self.date_format)
            except SpreadsheetParseError:
                await run_in_threadpool(self.storage.discard, path)
                raise

            await run_in_threadpool(self.storage.remove_stale, market, location, path)

            entry = MarketEntry(
                products=listing.products,
                file_name=path.name,
                update_info=listing.update_info,
            )
            self.index.put(market, location, entry)

        logger.info(f"Parsed {len(entry.products)} products for {describe(market, location)}")
        logger.info(f"Update info: {entry.update_info.formatted}")
        return entry

    async def lookup(self, market: str, location: Optional[str] = None) -> MarketEntry:
        """
        Latest listing for a market key.

        Falls back to re-parsing the newest stored file when nothing is
        cached (e.g. after a restart). An unknown key yields an empty entry.

        Raises:
            SpreadsheetParseError: If the stored file cannot be parsed
        """
        async with self.index.lock(market, location):
            entry = self.index.get(market, location)
            if entry is not None:
                return entry

            path = await run_in_threadpool(self.storage.latest, market, location)
            if path is None:
                return MarketEntry()

            logger.info(f"Loading {describe(market, location)} from disk: {path.name}")
            listing = await run_in_threadpool(parse_spreadsheet, path, self.date_format)

            entry = MarketEntry(
                products=listing.products,
                file_name=path.name,
                update_info=listing.update_info,
            )
            self.index.put(market, location, entry)
            return entry
