"""Recommendation engine.

Derives prioritized menu suggestions for cafeteria staff from the current
menu, the popularity ranking and the waste summary.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Sequence

from ecotaste.domain.insights.entities import PopularityRecord, WasteSummary
from ecotaste.domain.menu.menu_item import MenuItem

HIGH_CARBON_THRESHOLD = 3.0
PLANT_BASED_RATIO_TARGET = 0.5
HIGH_WASTE_THRESHOLD = 3
AVERAGE_CARBON_THRESHOLD = 1.5


class RecommendationType(str, Enum):
    CARBON = "carbon"
    POPULAR = "popular"
    WASTE = "waste"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(frozen=True)
class Recommendation:
    type: RecommendationType
    message: str
    priority: Priority


def _format_number(value: float) -> str:
    # Shortest round-trip form: 4.5 -> "4.5", 4.0 -> "4", 3.1234567 -> "3.1234567"
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _round_half_up(value: float, places: int = 0) -> Decimal:
    # Exact binary value, ties away from zero: 2.25 -> 2.3, 12.5 -> 13
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def recommendations(
    menu: Sequence[MenuItem],
    top_items: Sequence[PopularityRecord],
    most_wasted: Sequence[WasteSummary],
) -> List[Recommendation]:
    """Evaluate the recommendation rules, highest priority first.

    Rules, in evaluation order:
    1. a menu item above 3 kg CO2 (first one only)   -> high / carbon
    2. less than half of the menu is plant-based     -> medium / carbon
    3. the most selected item                         -> low / popular
    4. top waste score above 3                        -> high / waste
    5. average menu footprint above 1.5 kg            -> medium / carbon

    Ties in priority keep evaluation order. An empty menu counts as one
    item for the ratio and average, so it reports 0% plant-based.

    Args:
        menu: Current menu items
        top_items: Popularity ranking, most selected first
        most_wasted: Waste ranking, highest score first
    """
    result: List[Recommendation] = []

    high_carbon = [item for item in menu if item.carbon_footprint > HIGH_CARBON_THRESHOLD]
    if high_carbon:
        item = high_carbon[0]
        result.append(
            Recommendation(
                type=RecommendationType.CARBON,
                message=(
                    f"Consider replacing {item.name} "
                    f"({_format_number(item.carbon_footprint)}kg CO₂) with plant-based "
                    "alternatives to reduce carbon footprint by up to 80%"
                ),
                priority=Priority.HIGH,
            )
        )

    divisor = len(menu) or 1
    plant_based_ratio = sum(1 for item in menu if item.is_plant_based) / divisor
    if plant_based_ratio < PLANT_BASED_RATIO_TARGET:
        result.append(
            Recommendation(
                type=RecommendationType.CARBON,
                message=(
                    f"Only {_round_half_up(plant_based_ratio * 100)}% of today's menu is "
                    "plant-based. Adding more vegetable options can significantly "
                    "reduce carbon footprint."
                ),
                priority=Priority.MEDIUM,
            )
        )

    if top_items:
        favorite = top_items[0]
        result.append(
            Recommendation(
                type=RecommendationType.POPULAR,
                message=(
                    f'"{favorite.item_name}" is a student favorite with '
                    f"{favorite.selections} selections! Consider keeping it on the "
                    "menu regularly."
                ),
                priority=Priority.LOW,
            )
        )

    if most_wasted and most_wasted[0].waste_score > HIGH_WASTE_THRESHOLD:
        result.append(
            Recommendation(
                type=RecommendationType.WASTE,
                message=(
                    f'"{most_wasted[0].item_name}" has high waste. Consider reducing '
                    "portion sizes or offering it less frequently."
                ),
                priority=Priority.HIGH,
            )
        )

    average = sum(item.carbon_footprint for item in menu) / divisor
    if average > AVERAGE_CARBON_THRESHOLD:
        result.append(
            Recommendation(
                type=RecommendationType.CARBON,
                message=(
                    f"Today's menu averages {_round_half_up(average, 1)}kg CO₂ per item. "
                    "Target under 1kg for a sustainable menu!"
                ),
                priority=Priority.MEDIUM,
            )
        )

    return sorted(result, key=lambda r: r.priority.rank)
