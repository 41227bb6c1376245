"""
YGO Prices — Configuration & Constants

Service endpoints, timeouts and pipeline defaults. Every URL and tunable
lives here so the pipeline modules carry no hardcoded values.

Usage:
    from ygo_prices.config import settings
"""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

from ygo_prices.errors import ConfigurationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ArbitrationStrategy(str, Enum):
    """Tie-break rule when several printings match a record."""
    MIN_VALUE = "MinValue"  # cheapest eligible printing
    MAX_VALUE = "MaxValue"  # most expensive eligible printing

    @classmethod
    def parse(cls, raw: str) -> ArbitrationStrategy:
        """
        Parse a CLI/env spelling of the strategy.

        Accepts "Min", "MinValue", "Max" and "MaxValue". Anything else is
        rejected rather than defaulted.
        """
        value = raw.strip()
        if value in _STRATEGY_ALIASES:
            return _STRATEGY_ALIASES[value]
        raise ConfigurationError(
            f"Unknown arbitration strategy '{raw}'. "
            f"Expected one of: {', '.join(_STRATEGY_ALIASES)}",
            details={"strategy": raw},
        )


_STRATEGY_ALIASES: dict[str, ArbitrationStrategy] = {
    "Min": ArbitrationStrategy.MIN_VALUE,
    "MinValue": ArbitrationStrategy.MIN_VALUE,
    "Max": ArbitrationStrategy.MAX_VALUE,
    "MaxValue": ArbitrationStrategy.MAX_VALUE,
}


class InputFormat(str, Enum):
    """How the input stream is interpreted."""
    AUTO = "auto"          # .ydk extension → deck list, otherwise CSV
    CSV = "csv"
    DECKLIST = "decklist"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for ygo-prices.

    Loads from YGO_PRICES_* environment variables (or .env) with fallback
    defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="YGO_PRICES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -----------------------------------------------------------------------
    # YGOPRODeck — passcode → card name (batched)
    # -----------------------------------------------------------------------
    CARD_INFO_URL: str = "https://db.ygoprodeck.com/api/v7"

    # -----------------------------------------------------------------------
    # YugiohPrices — card name → priced printings
    # -----------------------------------------------------------------------
    CARD_PRICES_URL: str = "http://yugiohprices.com/api"

    # -----------------------------------------------------------------------
    # Exchange rates
    # -----------------------------------------------------------------------
    EXCHANGE_RATES_URL: str = "https://api.exchangeratesapi.io"
    EXCHANGE_API_KEY: str = ""              # sent as access_key when set
    BASE_CURRENCY: str = "USD"              # currency the price service quotes in

    # -----------------------------------------------------------------------
    # HTTP
    # -----------------------------------------------------------------------
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # -----------------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------------
    MAX_CONCURRENT_LOOKUPS: int = 1         # 1 = strictly sequential lookups
    DEFAULT_ARBITRATION_STRATEGY: ArbitrationStrategy = ArbitrationStrategy.MIN_VALUE
    DECKLIST_EXTENSION: str = ".ydk"

    # -----------------------------------------------------------------------
    # Logging
    # -----------------------------------------------------------------------
    LOG_LEVEL: str = "WARNING"


# Singleton instance
settings = Settings()
