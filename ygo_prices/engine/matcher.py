"""
YGO Prices — Price Matching & Arbitration

Given a record and every printing the price service returned for its name,
keep the eligible printings and pick one under the active strategy:

    eligible = priced
               AND (record.tag is None    OR record.tag == print_tag)
               AND (record.rarity is None OR record.rarity == rarity)

MIN_VALUE picks the lowest average, MAX_VALUE the highest. Ties go to the
first printing in response order. A match overwrites price, tag and rarity
on the record so it carries the chosen printing's identity.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import structlog

from ygo_prices.config import ArbitrationStrategy
from ygo_prices.errors import NonFinitePriceError
from ygo_prices.models.candidate import PriceCandidate
from ygo_prices.models.record import Record

logger = structlog.get_logger(__name__)


def is_eligible(record: Record, candidate: PriceCandidate) -> bool:
    """True when the candidate is priced and matches every constraint the record sets."""
    if candidate.price_stats is None:
        return False
    if record.tag is not None and record.tag != candidate.print_tag:
        return False
    if record.rarity is not None and record.rarity != candidate.rarity:
        return False
    return True


def eligible_candidates(
    record: Record, candidates: Iterable[PriceCandidate]
) -> list[PriceCandidate]:
    return [c for c in candidates if is_eligible(record, c)]


def price_key(candidate: PriceCandidate) -> float:
    """
    Arbitration key: the candidate's average price.

    Raises:
        NonFinitePriceError: If the average is NaN or infinite.
    """
    assert candidate.price_stats is not None
    average = candidate.price_stats.average
    if not math.isfinite(average):
        raise NonFinitePriceError(candidate.name, candidate.print_tag, average)
    return average


def select_candidate(
    candidates: Sequence[PriceCandidate],
    strategy: ArbitrationStrategy,
) -> PriceCandidate | None:
    """
    Pick one candidate from an already-eligible sequence.

    Every key is validated before comparison, so a non-finite price fails
    the whole selection instead of being skipped. Only a strictly better
    key replaces the current best, which keeps the first of equal keys.

    Returns:
        The selected candidate, or None if the sequence is empty.
    """
    keys = [price_key(c) for c in candidates]
    if not keys:
        return None

    best = 0
    for index in range(1, len(keys)):
        if strategy is ArbitrationStrategy.MIN_VALUE:
            better = keys[index] < keys[best]
        else:
            better = keys[index] > keys[best]
        if better:
            best = index
    return candidates[best]


def match_record(
    record: Record,
    candidates: Sequence[PriceCandidate],
    strategy: ArbitrationStrategy,
) -> PriceCandidate | None:
    """
    Price a record in place from the service's candidate list.

    Args:
        record: Record to enrich. Left untouched when nothing is eligible.
        candidates: All printings returned for record.name, in response order.
        strategy: Active arbitration strategy.

    Returns:
        The selected candidate, or None when no candidate was eligible.

    Raises:
        NonFinitePriceError: If an eligible candidate has a NaN/inf average.
    """
    eligible = eligible_candidates(record, candidates)
    chosen = select_candidate(eligible, strategy)

    if chosen is None:
        logger.info(
            "matcher_no_eligible_candidate",
            card_name=record.name,
            tag=record.tag,
            rarity=record.rarity,
            candidates=len(candidates),
        )
        return None

    assert chosen.price_stats is not None
    record.price = chosen.price_stats.average
    record.tag = chosen.print_tag
    record.rarity = chosen.rarity

    logger.debug(
        "matcher_candidate_selected",
        card_name=record.name,
        print_tag=chosen.print_tag,
        rarity=chosen.rarity,
        price=record.price,
        strategy=strategy.value,
        eligible=len(eligible),
    )
    return chosen
