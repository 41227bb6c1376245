"""
YGO Prices — Tabular (CSV) Record Reader

Reads a header row plus data rows into Records. Cells are trimmed; an empty
cell or a column missing from the header maps to None, never to "".
"""

from __future__ import annotations

import csv
import math
from collections.abc import Callable
from typing import Any, TextIO

import structlog

from ygo_prices.errors import MalformedRecordError
from ygo_prices.ingest.decklist import BOM
from ygo_prices.ingest.schema import validate_headers
from ygo_prices.models.record import Record

logger = structlog.get_logger(__name__)


def _finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"non-finite price {raw!r}")
    return value


_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "name": str,
    "tag": str,
    "count": int,
    "rarity": str,
    "price": _finite_float,
}


def _clean(cell: str | None) -> str | None:
    if cell is None:
        return None
    cell = cell.strip()
    return cell or None


def read_records(stream: TextIO) -> list[Record]:
    """
    Parse CSV text into Records.

    Args:
        stream: Text stream positioned at the header row.

    Returns:
        Records in input order.

    Raises:
        SchemaError: If the header row is rejected.
        MalformedRecordError: If a count/price cell cannot be parsed or a
            row has no name.
    """
    reader = csv.reader(stream, skipinitialspace=True)
    header_row = next(reader, [])
    headers = [cell.strip() for cell in header_row]
    if headers:
        headers[0] = headers[0].lstrip(BOM)
    validate_headers(headers)

    records: list[Record] = []
    # Row numbers are 1-based and count the header as row 1.
    for row_number, row in enumerate(reader, start=2):
        cells = [_clean(cell) for cell in row]
        if not any(cells):
            continue

        values: dict[str, Any] = {}
        for index, header in enumerate(headers):
            raw = cells[index] if index < len(cells) else None
            if raw is None:
                continue
            try:
                values[header] = _CONVERTERS[header](raw)
            except ValueError:
                raise MalformedRecordError(row_number, header, raw) from None

        if "name" not in values:
            raise MalformedRecordError(row_number, "name", "")

        records.append(Record(**values))

    logger.info("tabular_records_read", count=len(records))
    return records
