"""
YGO Prices — Exchange Rate Client

Resolves the multiplier from the base currency (USD, the price service's
currency) to a requested currency:

    GET /latest?base=USD&symbols=EUR[&access_key=...]
    → {"rates": {"EUR": 0.92}, "base": "USD", "date": "2026-10-16"}

Called at most once per run.
"""

from __future__ import annotations

import math

import structlog
from pydantic import BaseModel, Field

from ygo_prices.config import settings
from ygo_prices.errors import ExchangeRateNotFoundError, ServiceError
from ygo_prices.pipeline.base import ServiceClient

logger = structlog.get_logger(__name__)


class ExchangeRatesResponse(BaseModel):
    rates: dict[str, float] = Field(default_factory=dict)
    base: str | None = None
    date: str | None = None


class ExchangeRateClient(ServiceClient):
    """
    Async client for the exchange-rate service.

    Usage:
        async with ExchangeRateClient() as client:
            rate = await client.fetch_rate("EUR")
    """

    SERVICE = "exchange_rates"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        base_currency: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(base_url or settings.EXCHANGE_RATES_URL, timeout=timeout)
        self._api_key = api_key if api_key is not None else settings.EXCHANGE_API_KEY
        self._base_currency = base_currency or settings.BASE_CURRENCY

    async def fetch_rate(self, currency: str) -> float:
        """
        Return how many units of `currency` one base unit buys.

        Args:
            currency: Upper-case 3-letter code.

        Raises:
            ExchangeRateNotFoundError: If the response has no rate for it.
            ServiceError: On transport or decoding failure, or a rate that is
                not a positive finite number.
        """
        if currency == self._base_currency:
            logger.debug("exchange_rate_identity", currency=currency)
            return 1.0

        params = {"base": self._base_currency, "symbols": currency}
        if self._api_key:
            params["access_key"] = self._api_key

        logger.info("exchange_rate_fetch", base=self._base_currency, currency=currency)

        response = await self._send("/latest", params=params)
        body = self._decode(response, ExchangeRatesResponse)

        if currency not in body.rates:
            logger.error(
                "exchange_rate_not_found",
                currency=currency,
                available=sorted(body.rates),
            )
            raise ExchangeRateNotFoundError(currency)

        rate = body.rates[currency]
        if not math.isfinite(rate) or rate <= 0:
            logger.error("exchange_rate_invalid", currency=currency, rate=rate)
            raise ServiceError(
                self.SERVICE,
                f"invalid rate {rate!r} for '{currency}'",
                details={"currency": currency, "rate": repr(rate)},
            )

        logger.info(
            "exchange_rate_fetch_complete",
            base=self._base_currency,
            currency=currency,
            rate=rate,
            date=body.date,
        )
        return rate
