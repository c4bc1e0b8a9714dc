"""
Spreadsheet parser for market price lists.

Sheet layout (first sheet only):
    Row 1:  A1 label, B1 update date, C1 update time
    Row 2+: one product per row, columns A..I

Columns:
    A: Назив (name)              F: Редовна цена (regular price)
    B: Продажна цена (sale)      G: Цена со попуст (discounted price)
    C: Единечна цена (unit)      H: Вид на попуст (discount type)
    D: Опис (description)        I: Времетраење на попуст (discount duration)
    E: Достапност (availability)
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from numbers import Number
from typing import Any, List, Sequence

import pandas as pd

from app.core.exceptions import SpreadsheetParseError
from app.schemas.product import Product, UpdateInfo

logger = logging.getLogger(__name__)

# Excel day 0; serial 25569 is 1970-01-01
EXCEL_EPOCH = date(1899, 12, 30)
SECONDS_PER_DAY = 86400

PRODUCT_COLUMNS = (
    "naziv",
    "prodazhna_cena",
    "edinichna_cena",
    "opis",
    "dostapnost",
    "redovna_cena",
    "cena_so_popust",
    "vid_na_popust",
    "vremetraenje_na_popust",
)


@dataclass
class ParsedListing:
    """Result of parsing one spreadsheet"""
    products: List[Product] = field(default_factory=list)
    update_info: UpdateInfo = field(default_factory=UpdateInfo)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return value is pd.NaT


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def cell_text(value: Any, date_format: str = "%d.%m.%Y") -> str:
    """Render a cell value as the text shown in the sheet."""
    if _is_blank(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.strftime(date_format)
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def serial_to_date(serial: float) -> date:
    """Convert an Excel serial day number to a calendar date."""
    return EXCEL_EPOCH + timedelta(days=math.floor(serial))


def fraction_to_hhmm(fraction: float) -> str:
    """Convert a fraction of a day to HH:MM."""
    total_seconds = round(fraction * SECONDS_PER_DAY)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours:02d}:{minutes:02d}"


def read_update_date(raw: Any, date_format: str) -> str:
    if _is_number(raw):
        return serial_to_date(raw).strftime(date_format)
    return cell_text(raw, date_format)


def read_update_time(raw: Any) -> str:
    if _is_number(raw):
        return fraction_to_hhmm(raw)
    if isinstance(raw, (datetime, time)):
        return raw.strftime("%H:%M")
    return cell_text(raw)


def build_update_info(header: Sequence[Any], date_format: str) -> UpdateInfo:
    raw_date = header[1] if len(header) > 1 else None
    raw_time = header[2] if len(header) > 2 else None

    date_part = read_update_date(raw_date, date_format)
    time_part = read_update_time(raw_time)

    return UpdateInfo(
        date=date_part,
        time=time_part,
        formatted=" ".join(part for part in (date_part, time_part) if part),
    )


def build_product(row: Sequence[Any], date_format: str) -> Product:
    values = {}
    for index, name in enumerate(PRODUCT_COLUMNS):
        raw = row[index] if index < len(row) else None
        values[name] = cell_text(raw, date_format)
    return Product(**values)


def _read_listing(file_path, date_format: str) -> ParsedListing:
    df = pd.read_excel(
        file_path,
        sheet_name=0,
        header=None,
        dtype=object,
        keep_default_na=False,
    )

    rows = df.values.tolist()
    if not rows:
        return ParsedListing()

    update_info = build_update_info(rows[0], date_format)
    products = [build_product(row, date_format) for row in rows[1:]]
    products = [p for p in products if p.naziv or p.prodazhna_cena]

    return ParsedListing(products=products, update_info=update_info)


def parse_spreadsheet(file_path, date_format: str = "%d.%m.%Y") -> ParsedListing:
    """
    Parse a market price list (.xlsx, .xls or .ods).

    Args:
        file_path: Path to the spreadsheet
        date_format: strftime format for dates read from the sheet

    Returns:
        ParsedListing with products (rows without name and sale price are
        dropped) and the header update info

    Raises:
        SpreadsheetParseError: If the file cannot be opened or any of its
            cells cannot be converted (e.g. a serial date out of range)
    """
    try:
        return _read_listing(file_path, date_format)
    except Exception as e:
        logger.error(f"Error processing spreadsheet {file_path}: {e}")
        raise SpreadsheetParseError(str(e)) from e
