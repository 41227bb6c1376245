"""
YGO Prices — Tabular output.

Always writes the five record columns in fixed order. Output files are
opened exclusively: an existing file is never overwritten.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from typing import TextIO

import structlog

from ygo_prices.errors import OutputExistsError
from ygo_prices.models.record import RECORD_FIELDS, Record

logger = structlog.get_logger(__name__)


def open_output(path: str) -> TextIO:
    """
    Create a new output file for writing.

    Raises:
        OutputExistsError: If the path already exists.
    """
    try:
        return open(path, "x", newline="", encoding="utf-8")
    except FileExistsError:
        logger.error("output_file_exists", path=path)
        raise OutputExistsError(path) from None


def write_records(records: Iterable[Record], stream: TextIO) -> int:
    """Write header plus one row per record. Returns the row count."""
    writer = csv.DictWriter(stream, fieldnames=list(RECORD_FIELDS), lineterminator="\n")
    writer.writeheader()

    rows = 0
    for record in records:
        writer.writerow(record.to_row())
        rows += 1

    logger.debug("output_records_written", rows=rows)
    return rows
