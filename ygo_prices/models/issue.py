"""
YGO Prices — Skip-and-report issues and the run report.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ygo_prices.models.record import Record


class IssueKind(str, Enum):
    """Why a line item was skipped or left unpriced."""
    UNKNOWN_IDENTIFIER = "unknown_identifier"  # deck-list passcode not found
    NO_CANDIDATES = "no_candidates"            # no eligible priced printing
    LOOKUP_FAILED = "lookup_failed"            # price lookup transport failure


class PricingIssue(BaseModel):
    """A warning about one identifier or record that did not get priced."""

    kind: IssueKind
    subject: str
    detail: str = ""

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.subject}"
        return f"{text} ({self.detail})" if self.detail else text


class PricingReport(BaseModel):
    """Result of a full pricing run."""

    records: list[Record] = Field(default_factory=list)
    issues: list[PricingIssue] = Field(default_factory=list)
    exchange_rate: float = 1.0
    currency: str = "USD"
    total: float | None = None
