"""Popularity & waste aggregator.

Pure functions over the popularity and waste ledgers. Rankings are stable:
ties keep the order in which items were first recorded.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from ecotaste.domain.insights.entities import (
    PopularityRecord,
    WasteQuantity,
    WasteRecord,
    WasteSummary,
)
from ecotaste.domain.shared.errors import InvalidLimitError, ValidationError

DEFAULT_TOP_ITEMS = 5
DEFAULT_MOST_WASTED = 3


def _check_limit(n: int) -> None:
    if n < 1:
        raise InvalidLimitError(f"Limit must be at least 1, got {n}")


def record_selection(
    records: Sequence[PopularityRecord],
    item_id: str,
    item_name: str,
    now: Optional[datetime] = None,
) -> List[PopularityRecord]:
    """Return the popularity list with one more selection of ``item_id``.

    A new record is appended at the end so ranking ties keep first-seen
    order.
    """
    now = now or datetime.now(timezone.utc)
    updated = list(records)
    for index, record in enumerate(updated):
        if record.item_id == item_id:
            updated[index] = replace(
                record, selections=record.selections + 1, last_selected=now
            )
            return updated

    updated.append(
        PopularityRecord(
            item_id=item_id, item_name=item_name, selections=1, last_selected=now
        )
    )
    return updated


def top_items(
    records: Sequence[PopularityRecord], n: int = DEFAULT_TOP_ITEMS
) -> List[PopularityRecord]:
    """Most selected items, highest first, at most ``n``."""
    _check_limit(n)
    return sorted(records, key=lambda r: r.selections, reverse=True)[:n]


def log_waste(
    item_id: str,
    item_name: str,
    quantity: WasteQuantity,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> WasteRecord:
    """Build a waste record for the ledger."""
    if not item_name or not item_name.strip():
        raise ValidationError("Wasted item name cannot be empty")
    return WasteRecord(
        id=uuid4().hex,
        item_id=item_id,
        item_name=item_name.strip(),
        quantity=quantity,
        timestamp=now or datetime.now(timezone.utc),
        notes=notes or None,
    )


def most_wasted_items(
    records: Sequence[WasteRecord], n: int = DEFAULT_MOST_WASTED
) -> List[WasteSummary]:
    """Items with the highest waste score, at most ``n``.

    The score of an item name is the sum of quantity weights
    (low=1, medium=2, high=3) over all of its reports.

    Example:
        >>> most_wasted_items([high("Pasta"), low("Pasta"), medium("Soup")])
        [WasteSummary(item_name='Pasta', waste_score=4),
         WasteSummary(item_name='Soup', waste_score=2)]
    """
    _check_limit(n)
    # dicts keep insertion order: first-seen item names rank first on ties
    scores: Dict[str, int] = {}
    for record in records:
        scores[record.item_name] = scores.get(record.item_name, 0) + record.quantity.weight

    summaries = [WasteSummary(item_name=name, waste_score=score) for name, score in scores.items()]
    return sorted(summaries, key=lambda s: s.waste_score, reverse=True)[:n]
