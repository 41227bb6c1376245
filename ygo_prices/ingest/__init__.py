from ygo_prices.ingest.decklist import OrderedCounter, parse_deck_list
from ygo_prices.ingest.schema import validate_headers
from ygo_prices.ingest.tabular import read_records

__all__ = [
    "OrderedCounter",
    "parse_deck_list",
    "read_records",
    "validate_headers",
]
