"""
YGO Prices — YugiohPrices Card Price Client

Fetches every printing of a card with its price statistics:

    GET /get_card_prices/<percent-encoded card name>

Names are percent-encoded in full (including ':' and '/') because card names
such as "I:P Masquerena" would otherwise be read as URL structure.

A printing the service cannot price carries price_data.status == "fail"
and no price_data.data; it is kept as a candidate without price_stats. An
unknown card name answers status "fail" with no data list, which maps to an
empty candidate list.
"""

from __future__ import annotations

from urllib.parse import quote

import structlog
from pydantic import BaseModel, Field

from ygo_prices.config import settings
from ygo_prices.models.candidate import PriceCandidate, PriceStats
from ygo_prices.pipeline.base import ServiceClient

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Pydantic Response Models
# ---------------------------------------------------------------------------


class PriceSummary(BaseModel):
    """price_data.data.prices"""
    high: float
    low: float
    average: float
    updated_at: str | None = None


class PriceDetailData(BaseModel):
    prices: PriceSummary


class PriceDetail(BaseModel):
    """price_data block of a printing."""
    status: str = ""
    data: PriceDetailData | None = None


class CardPrinting(BaseModel):
    """One printing in a get_card_prices response."""
    name: str
    print_tag: str
    rarity: str
    price_data: PriceDetail = Field(default_factory=PriceDetail)

    def to_candidate(self) -> PriceCandidate:
        stats = None
        if self.price_data.data is not None:
            summary = self.price_data.data.prices
            stats = PriceStats(
                high=summary.high,
                low=summary.low,
                average=summary.average,
                updated_at=summary.updated_at,
            )
        return PriceCandidate(
            name=self.name,
            print_tag=self.print_tag,
            rarity=self.rarity,
            price_stats=stats,
        )


class CardPriceResponse(BaseModel):
    """Top-level get_card_prices response."""
    status: str = ""
    message: str | None = None
    data: list[CardPrinting] = Field(default_factory=list)


def card_price_path(card_name: str) -> str:
    """Request path for a card name, encoding everything but alphanumerics and -._~."""
    return f"/get_card_prices/{quote(card_name, safe='')}"


# ---------------------------------------------------------------------------
# API Client
# ---------------------------------------------------------------------------


class CardPriceClient(ServiceClient):
    """
    Async client for the YugiohPrices get_card_prices endpoint.

    Usage:
        async with CardPriceClient() as client:
            candidates = await client.fetch_candidates("I:P Masquerena")
    """

    SERVICE = "cardprices"

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        super().__init__(base_url or settings.CARD_PRICES_URL, timeout=timeout)

    async def fetch_candidates(self, card_name: str) -> list[PriceCandidate]:
        """
        Fetch all printings for a card name, in response order.

        Args:
            card_name: Exact card name.

        Returns:
            PriceCandidate list; empty when the service does not know the name.
        """
        logger.info("cardprices_fetch_card", card_name=card_name)

        response = await self._send(card_price_path(card_name))
        body = self._decode(response, CardPriceResponse)

        if body.status == "fail" and not body.data:
            logger.info(
                "cardprices_card_not_found",
                card_name=card_name,
                message=body.message,
            )
            return []

        candidates = [printing.to_candidate() for printing in body.data]

        logger.info(
            "cardprices_fetch_card_complete",
            card_name=card_name,
            printings=len(candidates),
            priced=sum(1 for c in candidates if c.is_priced),
        )
        return candidates
