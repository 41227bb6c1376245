"""
YGO Prices — Price candidates.

A PriceCandidate is one printing of a card as returned by the card-price
service. Candidates without price_stats are never eligible for arbitration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PriceStats(BaseModel):
    """Price statistics for a printing."""

    high: float
    low: float
    average: float
    updated_at: str | None = None


class PriceCandidate(BaseModel):
    """One priced (or unpriced) printing of a card."""

    name: str
    print_tag: str
    rarity: str
    price_stats: PriceStats | None = Field(default=None)

    @property
    def is_priced(self) -> bool:
        return self.price_stats is not None
