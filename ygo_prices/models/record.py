"""
YGO Prices — Record Model

Record is the line item that flows through the whole pipeline. It is
created by the tabular reader or by deck-list resolution, enriched in place
by the matcher, scaled in place by the currency converter, then written out.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Output column order. Also the allowed tabular header vocabulary.
RECORD_FIELDS: tuple[str, ...] = ("name", "tag", "count", "rarity", "price")


class Record(BaseModel):
    """One card line item to be priced."""

    name: str = Field(..., min_length=1, description="Card name")
    tag: str | None = Field(default=None, description="Print tag (e.g., 'CHIM-EN049')")
    count: int | None = Field(default=None, description="Copies held")
    rarity: str | None = Field(default=None, description="Rarity (e.g., 'Ultra Rare')")
    price: float | None = Field(default=None, description="Unit price")

    @property
    def quantity(self) -> int:
        """Copies to count toward a total; a missing count means one."""
        return self.count if self.count is not None else 1

    def to_row(self) -> dict[str, str]:
        """Flatten to CSV cells; None becomes an empty cell."""
        return {
            field: "" if (value := getattr(self, field)) is None else str(value)
            for field in RECORD_FIELDS
        }


class DeckListEntry(BaseModel):
    """A distinct deck-list identifier with its aggregated count."""

    identifier: str
    count: int = Field(default=1, ge=1)
