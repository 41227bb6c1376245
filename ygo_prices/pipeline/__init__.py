from ygo_prices.pipeline.cardinfo import CardInfoClient
from ygo_prices.pipeline.cardprices import CardPriceClient
from ygo_prices.pipeline.exchange import ExchangeRateClient
from ygo_prices.pipeline.runner import (
    load_records,
    price_records,
    report_total,
    resolve_format,
    run_pricing,
)

__all__ = [
    "CardInfoClient",
    "CardPriceClient",
    "ExchangeRateClient",
    "load_records",
    "price_records",
    "report_total",
    "resolve_format",
    "run_pricing",
]
