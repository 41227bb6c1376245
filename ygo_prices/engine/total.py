"""
YGO Prices — Total Value

Total = Σ price × (count or 1). An unpriced record makes the total
undefined, so it is refused instead of counted as zero.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from ygo_prices.errors import UnpricedRecordsError
from ygo_prices.models.record import Record

logger = structlog.get_logger(__name__)


def calculate_total(records: Sequence[Record]) -> float:
    """
    Sum the value of all records.

    Raises:
        UnpricedRecordsError: If any record has no price.
    """
    unpriced = [record.name for record in records if record.price is None]
    if unpriced:
        logger.warning("total_refused_unpriced_records", unpriced=unpriced)
        raise UnpricedRecordsError(unpriced)

    total = sum(record.price * record.quantity for record in records)  # type: ignore[operator]
    logger.info("total_calculated", records=len(records), total=total)
    return float(total)
