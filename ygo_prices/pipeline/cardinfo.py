"""
YGO Prices — YGOPRODeck Card Info Client

Resolves deck-list passcodes to card names. All passcodes of a deck list
go out in a single request:

    GET /cardinfo.php?id=89631139,46986414,...

YGOPRODeck answers HTTP 400 with an {"error": ...} body when none of the
passcodes exist; that is treated as an empty result, not a failure.
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx
import structlog
from pydantic import BaseModel, Field

from ygo_prices.config import settings
from ygo_prices.pipeline.base import ServiceClient

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Pydantic Response Models
# ---------------------------------------------------------------------------


class CardInfoData(BaseModel):
    """One card in a cardinfo response. Only the fields we use."""
    id: int = Field(..., description="Card passcode")
    name: str = Field(..., description="Card name")


class CardInfoResponse(BaseModel):
    """Top-level cardinfo response."""
    data: list[CardInfoData] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# API Client
# ---------------------------------------------------------------------------


class CardInfoClient(ServiceClient):
    """
    Async client for the YGOPRODeck cardinfo endpoint.

    Usage:
        async with CardInfoClient() as client:
            names = await client.resolve_names(["89631139", "46986414"])
    """

    SERVICE = "cardinfo"

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        super().__init__(base_url or settings.CARD_INFO_URL, timeout=timeout)

    async def resolve_names(self, identifiers: Sequence[str]) -> dict[str, str]:
        """
        Look up card names for a batch of passcodes.

        Args:
            identifiers: Passcodes as they appear in the deck list.

        Returns:
            Mapping passcode → card name for every passcode the service
            knows. Unknown passcodes are simply absent.
        """
        if not identifiers:
            return {}

        logger.info("cardinfo_resolve_names", identifiers=len(identifiers))

        response = await self._send("/cardinfo.php", params={"id": ",".join(identifiers)})
        if response.status_code == 400 and _is_no_match(response):
            logger.info("cardinfo_no_matches", identifiers=len(identifiers))
            return {}

        body = self._decode(response, CardInfoResponse)
        by_passcode = {card.id: card.name for card in body.data}

        # Passcodes compare numerically so "04031928" matches id 4031928.
        names = {
            identifier: by_passcode[int(identifier)]
            for identifier in identifiers
            if identifier.isdigit() and int(identifier) in by_passcode
        }

        logger.info(
            "cardinfo_resolve_names_complete",
            identifiers=len(identifiers),
            resolved=len(names),
        )
        return names


def _is_no_match(response: httpx.Response) -> bool:
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and "error" in body
