"""
YGO Prices — Exception hierarchy.

Errors split along one line: InputError and ConfigurationError stop the run
before any network activity; ServiceError stops it when the failing call is
a once-per-run call (identifier batch, exchange rate) and is downgraded to
a reported issue by the runner for per-record price lookups.
"""

from __future__ import annotations

from typing import Any


class PricerError(Exception):
    """
    Base exception for all ygo-prices errors.

    Attributes:
        message: Human-readable message.
        details: Additional context for logging.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------


class InputError(PricerError):
    """The input cannot be turned into records."""


class SchemaError(InputError):
    """Tabular header row rejected."""


class MissingHeadersError(SchemaError):
    """No recognised header at all."""

    def __init__(self) -> None:
        super().__init__("Input has no recognised headers")


class MissingHeaderError(SchemaError):
    """A required header is absent."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Missing required header '{header}'", details={"header": header})


class DuplicateHeaderError(SchemaError):
    """A header name appears more than once."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Duplicate header '{header}'", details={"header": header})


class IllegalHeaderError(SchemaError):
    """A header outside the allowed vocabulary."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Illegal header '{header}'", details={"header": header})


class InputEncodingError(InputError):
    """The input bytes are not valid UTF-8 text."""

    def __init__(self, cause: UnicodeDecodeError):
        super().__init__(
            f"Input is not valid UTF-8 text: {cause.reason} at byte {cause.start}",
            details={"encoding": cause.encoding, "position": cause.start},
        )


class MalformedRecordError(InputError):
    """A data row has a cell that cannot be parsed."""

    def __init__(self, row: int, column: str, value: str):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"Malformed record on row {row}: invalid {column} '{value}'",
            details={"row": row, "column": column, "value": value},
        )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(PricerError):
    """A run option is invalid (strategy, currency code)."""


# ---------------------------------------------------------------------------
# Remote services
# ---------------------------------------------------------------------------


class ServiceError(PricerError):
    """A remote call failed in transport or returned an undecodable body."""

    def __init__(self, service: str, message: str, details: dict[str, Any] | None = None):
        self.service = service
        super().__init__(f"{service}: {message}", details=details)


class ExchangeRateNotFoundError(ServiceError):
    """The exchange-rate response carries no rate for the requested currency."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(
            "exchange_rates",
            f"Exchange rate not found for '{currency}'",
            details={"currency": currency},
        )


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------


class NonFinitePriceError(PricerError, ValueError):
    """An eligible candidate carries a NaN or infinite average price."""

    def __init__(self, name: str, print_tag: str, value: float):
        super().__init__(
            f"Non-finite average price {value!r} for '{name}' ({print_tag})",
            details={"name": name, "print_tag": print_tag, "value": repr(value)},
        )


class UnpricedRecordsError(PricerError):
    """Total requested while some records have no price."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(
            f"Cannot compute total: {len(names)} record(s) have no price "
            f"({', '.join(names)})",
            details={"unpriced": names},
        )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class OutputExistsError(PricerError):
    """Refusing to overwrite an existing output file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Output file '{path}' already exists", details={"path": path})
