"""
Storage of uploaded market spreadsheets on disk.

Each (market, location) key is backed by files named
``<market>[_<location>]_<epoch-ms><ext>``; after a successful upload only the
newest one is kept.
"""

import logging
import re
import shutil
import time
from pathlib import Path
from typing import BinaryIO, List, Optional

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[\\/\x00]")


def market_key(market: str, location: Optional[str] = None) -> str:
    """Build the storage key, e.g. ``Разнопромет`` or ``Market2_Центар``."""
    key = market + (f"_{location}" if location else "")
    return _UNSAFE_CHARS.sub("-", key)


class MarketFileStorage:
    """Saves, finds and prunes uploaded spreadsheets per market key"""

    def __init__(self, upload_dir):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(
        self,
        market: str,
        location: Optional[str],
        original_filename: Optional[str],
        fileobj: BinaryIO,
    ) -> Path:
        """
        Write an uploaded file under a timestamped name for its key.

        The extension of the client's filename is kept so the spreadsheet
        reader can pick the right engine.
        """
        ext = Path(original_filename or "").suffix
        key = market_key(market, location)
        timestamp = int(time.time() * 1000)
        path = self.upload_dir / f"{key}_{timestamp}{ext}"
        # Never overwrite the file currently backing the key
        while path.exists():
            timestamp += 1
            path = self.upload_dir / f"{key}_{timestamp}{ext}"

        with open(path, "wb") as f:
            shutil.copyfileobj(fileobj, f)

        logger.info(f"New file saved as: {path}")
        return path

    def files_for(self, market: str, location: Optional[str] = None) -> List[Path]:
        """
        Files backing exactly this key, newest first.

        ``Market2_lokacija1_<ts>.xlsx`` does not back the key ``Market2``.
        """
        pattern = re.compile(re.escape(market_key(market, location)) + r"(?:_(\d+))?(\.[^._]*)?")

        matches = []
        for path in self.upload_dir.iterdir():
            if not path.is_file():
                continue
            match = pattern.fullmatch(path.name)
            if match:
                matches.append((int(match.group(1) or 0), path))

        matches.sort(key=lambda item: item[0], reverse=True)
        return [path for _, path in matches]

    def latest(self, market: str, location: Optional[str] = None) -> Optional[Path]:
        files = self.files_for(market, location)
        return files[0] if files else None

    def remove_stale(self, market: str, location: Optional[str], keep: Path) -> List[str]:
        """
        Delete every file backing the key except ``keep``.

        Returns:
            Names of the deleted files
        """
        removed = []
        for path in self.files_for(market, location):
            if path.name == keep.name:
                continue
            logger.info(f"Deleting old file: {path}")
            path.unlink(missing_ok=True)
            removed.append(path.name)
        return removed

    def discard(self, path: Path) -> None:
        """Remove a file that failed to parse."""
        logger.info(f"Discarding unparsable upload: {path}")
        path.unlink(missing_ok=True)
