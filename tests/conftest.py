"""
YGO Prices — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Mock API response data loaded from tests/fixtures
- Record / candidate builders
- Async test support via pytest-asyncio
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from ygo_prices.models.candidate import PriceCandidate, PriceStats

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests bind structlog to CliRunner's stderr; restore defaults afterwards."""
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Fixture Loaders
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def kuriboh_prices() -> dict:
    """Mock get_card_prices response for Kuriboh (five printings, one unpriced)."""
    with open(FIXTURES / "card_prices_kuriboh.json") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def cardinfo_deck() -> dict:
    """Mock YGOPRODeck cardinfo response for Kuriboh and Sangan."""
    with open(FIXTURES / "cardinfo_deck.json") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def ydk_path() -> Path:
    """Sample deck list: Kuriboh x3, Sangan x2, one unknown passcode."""
    return FIXTURES / "deck.ydk"


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_candidate(
    average: float | None,
    print_tag: str = "LOB-EN001",
    rarity: str = "Common",
    name: str = "Kuriboh",
) -> PriceCandidate:
    """PriceCandidate with the given average; None means unpriced."""
    stats = None
    if average is not None:
        stats = PriceStats(high=average, low=average, average=average, updated_at=None)
    return PriceCandidate(name=name, print_tag=print_tag, rarity=rarity, price_stats=stats)


@pytest.fixture
def candidate_factory():
    """Expose make_candidate to tests as a fixture."""
    return make_candidate
