from ygo_prices.engine.currency import apply_exchange_rate, normalize_currency
from ygo_prices.engine.matcher import (
    eligible_candidates,
    is_eligible,
    match_record,
    select_candidate,
)
from ygo_prices.engine.total import calculate_total

__all__ = [
    "apply_exchange_rate",
    "calculate_total",
    "eligible_candidates",
    "is_eligible",
    "match_record",
    "normalize_currency",
    "select_candidate",
]
