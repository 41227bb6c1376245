"""
YGO Prices — Tabular Schema Validation

Checks a CSV header row against the record vocabulary before any row is
parsed. Checks run in a fixed order and the first violation is raised:

    1. no recognised header at all   → MissingHeadersError
    2. a required header is absent   → MissingHeaderError
    3. a header is repeated          → DuplicateHeaderError
    4. a header is not in vocabulary → IllegalHeaderError
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from ygo_prices.errors import (
    DuplicateHeaderError,
    IllegalHeaderError,
    MissingHeaderError,
    MissingHeadersError,
)
from ygo_prices.models.record import RECORD_FIELDS

logger = structlog.get_logger(__name__)

ALLOWED_HEADERS: frozenset[str] = frozenset(RECORD_FIELDS)
REQUIRED_HEADERS: tuple[str, ...] = ("name",)


def validate_headers(
    headers: Sequence[str],
    allowed: Iterable[str] = ALLOWED_HEADERS,
    required: Sequence[str] = REQUIRED_HEADERS,
) -> None:
    """
    Validate a header row.

    Args:
        headers: Header cells as read (already trimmed).
        allowed: Permitted header names.
        required: Header names that must be present, checked in order.

    Raises:
        MissingHeadersError, MissingHeaderError, DuplicateHeaderError,
        IllegalHeaderError: the first violation found.
    """
    allowed = frozenset(allowed)
    present = set(headers)

    if not headers or present.isdisjoint(allowed):
        logger.warning("schema_missing_headers", headers=list(headers))
        raise MissingHeadersError()

    for header in required:
        if header not in present:
            logger.warning("schema_missing_header", header=header)
            raise MissingHeaderError(header)

    seen: set[str] = set()
    for header in headers:
        if header in seen:
            logger.warning("schema_duplicate_header", header=header)
            raise DuplicateHeaderError(header)
        seen.add(header)

    for header in headers:
        if header not in allowed:
            logger.warning("schema_illegal_header", header=header)
            raise IllegalHeaderError(header)

    logger.debug("schema_headers_valid", headers=list(headers))
