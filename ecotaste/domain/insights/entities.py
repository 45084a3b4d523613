"""Insight entities: item popularity and waste reports."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ecotaste.domain.shared.errors import ValidationError


class WasteQuantity(str, Enum):
    """How much of a served item came back uneaten."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        """Contribution of one report to an item's waste score."""
        return _WASTE_WEIGHTS[self]

    @classmethod
    def parse(cls, value: str) -> "WasteQuantity":
        try:
            return cls((value or "").strip().lower())
        except ValueError as e:
            raise ValidationError(f"Unknown waste quantity: {value!r}") from e


_WASTE_WEIGHTS = {
    WasteQuantity.LOW: 1,
    WasteQuantity.MEDIUM: 2,
    WasteQuantity.HIGH: 3,
}


@dataclass(frozen=True)
class PopularityRecord:
    """Selection counter for one menu item.

    Invariants:
    - selections >= 1 once the record exists
    """

    item_id: str
    item_name: str
    selections: int
    last_selected: datetime


@dataclass(frozen=True)
class WasteRecord:
    """Entry of the waste ledger. Append-only."""

    id: str
    item_id: str
    item_name: str
    quantity: WasteQuantity
    timestamp: datetime
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            raise ValueError("Timestamp must be timezone-aware (use UTC)")


@dataclass(frozen=True)
class WasteSummary:
    """Aggregated waste score of one item name."""

    item_name: str
    waste_score: int
