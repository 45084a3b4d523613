"""GraphQL types for popularity, waste and recommendations."""

from __future__ import annotations

from typing import Annotated, Optional, Union
from datetime import datetime
from enum import Enum
import strawberry

from ecotaste.domain.insights.entities import (
    PopularityRecord,
    WasteRecord as DomainWasteRecord,
    WasteSummary,
)
from ecotaste.domain.insights.recommendation_engine import (
    Recommendation as DomainRecommendation,
)
from ecotaste.graphql_api.types_menu import AccountRole


__all__ = [
    "WasteQuantity",
    "RecommendationType",
    "Priority",
    "PopularItem",
    "WastedItem",
    "WasteRecord",
    "Recommendation",
    "LogWasteInput",
    "LogWasteSuccess",
    "LogWasteError",
    "LogWasteResult",
    "map_popular_item",
    "map_wasted_item",
    "map_waste_record",
    "map_recommendation",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class WasteQuantity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@strawberry.enum
class RecommendationType(Enum):
    CARBON = "carbon"
    POPULAR = "popular"
    WASTE = "waste"


@strawberry.enum
class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ============================================
# OBJECT TYPES
# ============================================


@strawberry.type
class PopularItem:
    """Selection count of a menu item."""

    item_id: str
    item_name: str
    selections: int
    last_selected: datetime


@strawberry.type
class WastedItem:
    """Waste score of an item (low=1, medium=2, high=3 per report)."""

    item_name: str
    waste_score: int


@strawberry.type
class WasteRecord:
    id: str
    item_id: str
    item_name: str
    quantity: WasteQuantity
    timestamp: datetime
    notes: Optional[str] = None


@strawberry.type
class Recommendation:
    type: RecommendationType
    message: str
    priority: Priority


# ============================================
# MUTATION TYPES
# ============================================


@strawberry.input
class LogWasteInput:
    """Input for log waste mutation.

    ``quantity`` is "low", "medium" or "high". ``itemName`` is only used
    for items no longer on the menu.
    """

    item_id: str
    quantity: str
    item_name: Optional[str] = None
    notes: Optional[str] = None
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


@strawberry.type
class LogWasteSuccess:
    waste: WasteRecord


@strawberry.type
class LogWasteError:
    message: str
    code: str = "LOG_WASTE_FAILED"


LogWasteResult = Annotated[
    Union[LogWasteSuccess, LogWasteError],
    strawberry.union("LogWasteResult"),
]


# ============================================
# MAPPERS
# ============================================


def map_popular_item(record: PopularityRecord) -> PopularItem:
    return PopularItem(
        item_id=record.item_id,
        item_name=record.item_name,
        selections=record.selections,
        last_selected=record.last_selected,
    )


def map_wasted_item(summary: WasteSummary) -> WastedItem:
    return WastedItem(item_name=summary.item_name, waste_score=summary.waste_score)


def map_waste_record(record: DomainWasteRecord) -> WasteRecord:
    return WasteRecord(
        id=record.id,
        item_id=record.item_id,
        item_name=record.item_name,
        quantity=WasteQuantity(record.quantity.value),
        timestamp=record.timestamp,
        notes=record.notes,
    )


def map_recommendation(recommendation: DomainRecommendation) -> Recommendation:
    return Recommendation(
        type=RecommendationType(recommendation.type.value),
        message=recommendation.message,
        priority=Priority(recommendation.priority.value),
    )
