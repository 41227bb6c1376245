"""
Models package — export the pipeline data models.
"""

from ygo_prices.models.candidate import PriceCandidate, PriceStats
from ygo_prices.models.issue import IssueKind, PricingIssue, PricingReport
from ygo_prices.models.record import RECORD_FIELDS, DeckListEntry, Record

__all__ = [
    "DeckListEntry",
    "IssueKind",
    "PriceCandidate",
    "PriceStats",
    "PricingIssue",
    "PricingReport",
    "RECORD_FIELDS",
    "Record",
]
