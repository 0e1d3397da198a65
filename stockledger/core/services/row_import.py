"""
Spreadsheet row interpretation for bulk imports.

Rows arrive as loosely-shaped mappings (one per sheet row, keyed by the
header text the user happened to use). Columns are resolved through
prioritized alias lists, and stock values go through a tolerant numeric
parse with two distinct outcomes:

- missing or blank cell  -> 0 (a valid value)
- no digits left to read -> parse failure, the row is skipped
"""

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from stockledger.core.exceptions import ImportRowError

# Header aliases, highest priority first. Matching is case-insensitive.
DESCRIPTION_ALIASES = ("Description", "Product", "Item", "Name", "បរិយាយ", "ឈ្មោះ")
UNIT_ALIASES = ("Unit", "UOM", "Unit of Measure", "ឯកតា")
STOCK_IN_ALIASES = (
    "Stock In",
    "StockIn",
    "Stock_In",
    "Stock",
    "Qty",
    "Quantity",
    "Initial Stock",
    "Stock ចូល",
    "Stock ទទួល",
)
STOCK_OUT_ALIASES = ("Stock Out", "StockOut", "Stock_Out", "Stock ចេញ", "Stock ប្រើ")

Row = Mapping[str, Any]

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


@dataclass(frozen=True)
class ParsedRow:
    """A row reduced to the fields the ledger needs."""

    row_number: int
    description: str
    unit: str
    stock_in: float
    stock_out: float


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def find_column_value(row: Row, aliases: Sequence[str]) -> Any | None:
    """
    Look up the first non-blank value under any alias.

    Exact header names are tried first in alias order, then headers are
    compared case-insensitively (ignoring surrounding whitespace).
    """
    for alias in aliases:
        value = row.get(alias)
        if not _is_blank(value):
            return value

    wanted = [alias.casefold() for alias in aliases]
    by_header = {str(key).strip().casefold(): value for key, value in row.items()}
    for alias in wanted:
        value = by_header.get(alias)
        if not _is_blank(value):
            return value
    return None


def parse_stock_value(value: Any) -> float | None:
    """
    Tolerantly parse a stock cell.

    Returns 0 for missing cells, a non-negative float for anything with a
    readable number in it, and None when nothing numeric can be read.
    Every character other than digits and '.' is discarded before parsing,
    so "1,250 pcs" reads as 1250.
    """
    if _is_blank(value):
        return 0.0
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return max(0.0, number) if math.isfinite(number) else None

    cleaned = _NON_NUMERIC.sub("", str(value).strip())
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None
    number = float(match.group())
    return max(0.0, number) if math.isfinite(number) else None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_row(row: Any, row_number: int) -> ParsedRow:
    """Resolve one sheet row. Raises ImportRowError when the row must be skipped."""
    if not isinstance(row, Mapping):
        raise ImportRowError(row_number, "Row is not an object")

    description = _as_text(find_column_value(row, DESCRIPTION_ALIASES))
    unit = _as_text(find_column_value(row, UNIT_ALIASES))
    if not description or not unit:
        raise ImportRowError(
            row_number,
            f'Missing required fields (Description: "{description}", Unit: "{unit}")',
        )

    raw_in = find_column_value(row, STOCK_IN_ALIASES)
    raw_out = find_column_value(row, STOCK_OUT_ALIASES)
    stock_in = parse_stock_value(raw_in)
    stock_out = parse_stock_value(raw_out)
    if stock_in is None or stock_out is None:
        raise ImportRowError(
            row_number,
            f'Invalid stock values (Stock In: "{_as_text(raw_in)}", '
            f'Stock Out: "{_as_text(raw_out)}")',
        )

    return ParsedRow(
        row_number=row_number,
        description=description,
        unit=unit,
        stock_in=stock_in,
        stock_out=stock_out,
    )
