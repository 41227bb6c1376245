"""
YGO Prices — Currency Conversion

Scales every priced record by a single exchange rate. The rate is resolved
once per run by the exchange-rate client; this module only applies it.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

import structlog

from ygo_prices.errors import ConfigurationError
from ygo_prices.models.record import Record

logger = structlog.get_logger(__name__)

_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}$")


def normalize_currency(code: str) -> str:
    """
    Validate and upper-case a 3-letter currency code.

    Raises:
        ConfigurationError: If the code is not three ASCII letters.
    """
    code = code.strip()
    if not _CURRENCY_CODE.match(code):
        raise ConfigurationError(
            f"Invalid currency code '{code}'. Expected a 3-letter code such as EUR.",
            details={"currency": code},
        )
    return code.upper()


def apply_exchange_rate(records: Iterable[Record], rate: float = 1.0) -> int:
    """
    Multiply price in place on every priced record.

    Args:
        records: Records to convert. Unpriced records are left alone.
        rate: Target units per base unit.

    Returns:
        Number of records converted.

    Raises:
        ValueError: If rate is not a positive finite number.
    """
    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"rate must be positive and finite, got {rate}")

    converted = 0
    for record in records:
        if record.price is None:
            continue
        record.price = record.price * rate
        converted += 1

    logger.debug("currency_rate_applied", rate=rate, converted=converted)
    return converted
