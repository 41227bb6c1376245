"""
YGO Prices — Deck List Parser

Parses line-oriented deck lists (.ydk) into count-aggregated entries.

Only lines whose first character is a digit are significant; section
headers (#main, #extra, !side) and comments are skipped. A line is either
a bare passcode, counted once per occurrence, or "<count> <passcode>",
which adds <count> copies. Entries come out in first-seen order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from ygo_prices.models.record import DeckListEntry

logger = structlog.get_logger(__name__)

BOM = "\ufeff"


class OrderedCounter:
    """
    Identifier → count mapping that remembers first-seen order.

    The counts live in a plain mapping; emission order comes from a
    separate append-only key sequence, so a repeated key never moves.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._order: list[str] = []

    def add(self, key: str, amount: int = 1) -> None:
        if key not in self._counts:
            self._counts[key] = 0
            self._order.append(key)
        self._counts[key] += amount

    def __getitem__(self, key: str) -> int:
        return self._counts[key]

    def __contains__(self, key: object) -> bool:
        return key in self._counts

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def items(self) -> Iterator[tuple[str, int]]:
        for key in self._order:
            yield key, self._counts[key]


def _split_line(line: str) -> tuple[str, int]:
    """Return (identifier, copies) for a significant line."""
    parts = line.split()
    if len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
        return parts[1], int(parts[0])
    return line, 1


def parse_deck_list(lines: Iterable[str]) -> list[DeckListEntry]:
    """
    Parse deck-list lines into distinct entries.

    Never raises on content: anything not recognised is skipped.

    Args:
        lines: Raw text lines (trailing newlines allowed).

    Returns:
        DeckListEntry list in first-seen order.
    """
    counter = OrderedCounter()
    skipped = 0

    for raw in lines:
        line = raw.rstrip().lstrip(BOM)
        if not line or not line[0].isdigit():
            if line:
                skipped += 1
            continue

        identifier, copies = _split_line(line)
        if copies < 1:
            skipped += 1
            continue
        counter.add(identifier, copies)

    entries = [DeckListEntry(identifier=key, count=count) for key, count in counter.items()]
    logger.info(
        "decklist_parsed",
        entries=len(entries),
        cards=sum(entry.count for entry in entries),
        skipped_lines=skipped,
    )
    return entries
