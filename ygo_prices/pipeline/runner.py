"""
YGO Prices — Pricing Pipeline Runner

Orchestrates one run:

    input → records (CSV, or deck list + batched name resolution)
          → per-record price lookup + arbitration (ordered, bounded pool)
          → one exchange-rate lookup → in-place conversion
          → optional total

Unknown passcodes, records without an eligible printing and per-record
lookup failures are collected as PricingIssue and the run carries on.
Everything else propagates and stops the run.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from contextlib import AsyncExitStack
from pathlib import Path
from typing import TextIO

import structlog

from ygo_prices.config import ArbitrationStrategy, InputFormat, settings
from ygo_prices.engine.currency import apply_exchange_rate, normalize_currency
from ygo_prices.engine.matcher import match_record
from ygo_prices.engine.total import calculate_total
from ygo_prices.errors import InputEncodingError, ServiceError
from ygo_prices.ingest.decklist import parse_deck_list
from ygo_prices.ingest.tabular import read_records
from ygo_prices.models.issue import IssueKind, PricingIssue, PricingReport
from ygo_prices.models.record import Record
from ygo_prices.pipeline.cardinfo import CardInfoClient
from ygo_prices.pipeline.cardprices import CardPriceClient
from ygo_prices.pipeline.exchange import ExchangeRateClient

logger = structlog.get_logger(__name__)


def resolve_format(path: str | None, fmt: InputFormat = InputFormat.AUTO) -> InputFormat:
    """Pick CSV or deck list; AUTO chooses deck list only for the .ydk extension."""
    if fmt is not InputFormat.AUTO:
        return fmt
    if path and Path(path).suffix.lower() == settings.DECKLIST_EXTENSION:
        return InputFormat.DECKLIST
    return InputFormat.CSV


# ---------------------------------------------------------------------------
# Stage 1 — Records
# ---------------------------------------------------------------------------


async def load_records(
    stream: TextIO,
    fmt: InputFormat,
    card_info: CardInfoClient | None = None,
) -> tuple[list[Record], list[PricingIssue]]:
    """
    Turn the input stream into Records.

    Args:
        stream: Input text.
        fmt: CSV or DECKLIST (resolve AUTO first).
        card_info: Open client, required for DECKLIST.

    Returns:
        (records, issues). Issues only arise on the deck-list path.

    Raises:
        SchemaError / MalformedRecordError: Rejected CSV input.
        InputEncodingError: The input is not UTF-8 text.
        ServiceError: The batched passcode lookup failed.
    """
    if fmt is InputFormat.CSV:
        try:
            return read_records(stream), []
        except UnicodeDecodeError as e:
            raise InputEncodingError(e) from e

    if fmt is not InputFormat.DECKLIST:
        raise ValueError(f"Unresolved input format: {fmt}")
    assert card_info is not None, "Deck list input needs a CardInfoClient"

    try:
        entries = parse_deck_list(stream)
    except UnicodeDecodeError as e:
        raise InputEncodingError(e) from e
    names = await card_info.resolve_names([entry.identifier for entry in entries])

    records: list[Record] = []
    issues: list[PricingIssue] = []
    for entry in entries:
        name = names.get(entry.identifier)
        if name is None:
            logger.warning("runner_unknown_identifier", identifier=entry.identifier)
            issues.append(
                PricingIssue(
                    kind=IssueKind.UNKNOWN_IDENTIFIER,
                    subject=entry.identifier,
                    detail=f"{entry.count} cop{'y' if entry.count == 1 else 'ies'} skipped",
                )
            )
            continue
        records.append(Record(name=name, count=entry.count))

    return records, issues


# ---------------------------------------------------------------------------
# Stage 2 — Pricing
# ---------------------------------------------------------------------------


async def price_records(
    records: Sequence[Record],
    price_client: CardPriceClient,
    strategy: ArbitrationStrategy,
    max_concurrency: int | None = None,
) -> list[PricingIssue]:
    """
    Price every record in place.

    Lookups run through a semaphore of size max_concurrency (default from
    settings, 1 = sequential). Results are gathered by record index, so
    issue order follows input order whatever the completion order.

    Raises:
        NonFinitePriceError: Propagated from arbitration. Lookups still
            pending or in flight are cancelled before it propagates.
    """
    limit = settings.MAX_CONCURRENT_LOOKUPS if max_concurrency is None else max_concurrency
    if limit < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {limit}")
    semaphore = asyncio.Semaphore(limit)

    async def _price_one(record: Record) -> PricingIssue | None:
        async with semaphore:
            try:
                candidates = await price_client.fetch_candidates(record.name)
            except ServiceError as e:
                logger.error(
                    "runner_price_lookup_failed",
                    card_name=record.name,
                    error=e.message,
                )
                return PricingIssue(
                    kind=IssueKind.LOOKUP_FAILED,
                    subject=record.name,
                    detail=e.message,
                )

        if match_record(record, candidates, strategy) is None:
            return PricingIssue(
                kind=IssueKind.NO_CANDIDATES,
                subject=record.name,
                detail=f"{len(candidates)} printing(s), none eligible",
            )
        return None

    tasks = [asyncio.create_task(_price_one(record)) for record in records]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        # Fail fast: no lookup may outlive the run or touch a closed client.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    issues = [issue for issue in results if issue is not None]

    logger.info(
        "runner_pricing_complete",
        records=len(records),
        priced=sum(1 for r in records if r.price is not None),
        issues=len(issues),
        concurrency=limit,
    )
    return issues


# ---------------------------------------------------------------------------
# Full run
# ---------------------------------------------------------------------------


async def run_pricing(
    stream: TextIO,
    fmt: InputFormat,
    strategy: ArbitrationStrategy,
    currency: str | None = None,
    with_total: bool = False,
    max_concurrency: int | None = None,
    card_info: CardInfoClient | None = None,
    price_client: CardPriceClient | None = None,
    exchange_client: ExchangeRateClient | None = None,
) -> PricingReport:
    """
    Execute a full pricing run.

    Clients not supplied are created from settings and closed on exit.
    Supplied clients must already be open.

    When with_total is set and some records are unpriced, the returned
    report has total=None and an UnpricedRecordsError is NOT raised here;
    callers use report_total() to surface it.

    Raises:
        InputError, ConfigurationError, ServiceError, NonFinitePriceError.
    """
    target = normalize_currency(currency) if currency else settings.BASE_CURRENCY

    async with AsyncExitStack() as stack:
        if fmt is InputFormat.DECKLIST and card_info is None:
            card_info = await stack.enter_async_context(CardInfoClient())
        if price_client is None:
            price_client = await stack.enter_async_context(CardPriceClient())

        records, issues = await load_records(stream, fmt, card_info)
        logger.info("runner_records_loaded", records=len(records), format=fmt.value)

        issues += await price_records(records, price_client, strategy, max_concurrency)

        rate = 1.0
        if currency:
            if exchange_client is None:
                exchange_client = await stack.enter_async_context(ExchangeRateClient())
            rate = await exchange_client.fetch_rate(target)
        apply_exchange_rate(records, rate)

    report = PricingReport(
        records=records,
        issues=issues,
        exchange_rate=rate,
        currency=target,
    )
    if with_total and all(record.price is not None for record in records):
        report.total = calculate_total(records)
    return report


def report_total(report: PricingReport) -> float:
    """
    Total for a finished report.

    Raises:
        UnpricedRecordsError: If any record is unpriced.
    """
    if report.total is not None:
        return report.total
    return calculate_total(report.records)
