"""Unit tests for the recommendation engine."""

from datetime import datetime, timezone

from ecotaste.domain.insights.entities import PopularityRecord, WasteSummary
from ecotaste.domain.insights.recommendation_engine import (
    Priority,
    RecommendationType,
    recommendations,
)
from ecotaste.domain.menu.catalog import default_menu
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.menu.menu_item import MenuItem

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def _item(name: str, carbon: float, plant_based: bool) -> MenuItem:
    return MenuItem.create(name, FoodCategory.PROTEIN, carbon, plant_based)


class TestRecommendations:
    def test_default_menu_flags_beef_burger_only(self) -> None:
        """75% plant-based, average 1.16 kg: only the high-carbon rule fires."""
        result = recommendations(default_menu(), [], [])

        assert len(result) == 1
        assert result[0].type is RecommendationType.CARBON
        assert result[0].priority is Priority.HIGH
        assert result[0].message == (
            "Consider replacing Beef Burger (4.5kg CO₂) with plant-based alternatives "
            "to reduce carbon footprint by up to 80%"
        )

    def test_empty_menu_reports_zero_percent(self) -> None:
        result = recommendations([], [], [])

        assert len(result) == 1
        assert result[0].priority is Priority.MEDIUM
        assert result[0].message == (
            "Only 0% of today's menu is plant-based. Adding more vegetable options "
            "can significantly reduce carbon footprint."
        )

    def test_all_rules_sorted_by_priority(self) -> None:
        """Ties in priority keep evaluation order."""
        menu = [
            _item("Beef Burger", 4.5, False),
            _item("Steak", 5.0, False),
            _item("Garden Salad", 0.2, True),
        ]
        favorites = [
            PopularityRecord(
                item_id="9", item_name="Pizza", selections=7, last_selected=NOW
            )
        ]
        wasted = [WasteSummary(item_name="Pasta", waste_score=4)]

        result = recommendations(menu, favorites, wasted)

        assert [(r.type, r.priority) for r in result] == [
            (RecommendationType.CARBON, Priority.HIGH),
            (RecommendationType.WASTE, Priority.HIGH),
            (RecommendationType.CARBON, Priority.MEDIUM),
            (RecommendationType.CARBON, Priority.MEDIUM),
            (RecommendationType.POPULAR, Priority.LOW),
        ]
        assert result[0].message.startswith("Consider replacing Beef Burger (4.5kg CO₂)")
        assert result[1].message == (
            '"Pasta" has high waste. Consider reducing portion sizes or offering it '
            "less frequently."
        )
        assert result[2].message.startswith("Only 33% of today's menu is plant-based.")
        assert result[3].message == (
            "Today's menu averages 3.2kg CO₂ per item. Target under 1kg for a "
            "sustainable menu!"
        )
        assert result[4].message == (
            '"Pizza" is a student favorite with 7 selections! Consider keeping it on '
            "the menu regularly."
        )

    def test_waste_score_of_three_is_not_high(self) -> None:
        result = recommendations(
            default_menu(), [], [WasteSummary(item_name="Pasta", waste_score=3)]
        )

        assert all(r.type is not RecommendationType.WASTE for r in result)

    def test_whole_number_footprint_has_no_decimals(self) -> None:
        menu = [_item("Lamb Stew", 4.0, False), _item("Soup", 0.1, True)]

        result = recommendations(menu, [], [])

        assert result[0].message.startswith("Consider replacing Lamb Stew (4kg CO₂)")

    def test_plant_based_percentage_rounds_half_up(self) -> None:
        """1 of 8 items is 12.5%, reported as 13%."""
        menu = [_item("Tofu", 0.5, True)] + [
            _item(f"Dish {i}", 0.5, False) for i in range(7)
        ]

        result = recommendations(menu, [], [])

        assert len(result) == 1
        assert result[0].message.startswith("Only 13% of today's menu")

    def test_footprint_keeps_every_significant_digit(self) -> None:
        menu = [_item("Lamb Stew", 3.1234567, False), _item("Soup", 0.1, True)]

        result = recommendations(menu, [], [])

        assert result[0].message.startswith("Consider replacing Lamb Stew (3.1234567kg CO₂)")

    def test_average_rounds_half_up(self) -> None:
        """2.0 and 2.5 average 2.25, reported as 2.3."""
        menu = [_item("Chicken Wrap", 2.0, False), _item("Bean Chili", 2.5, True)]

        result = recommendations(menu, [], [])

        assert [r.message for r in result] == [
            "Today's menu averages 2.3kg CO₂ per item. Target under 1kg for a "
            "sustainable menu!"
        ]

    def test_whole_average_keeps_one_decimal(self) -> None:
        menu = [_item("Chicken Wrap", 2.0, False), _item("Bean Chili", 2.0, True)]

        result = recommendations(menu, [], [])

        assert result[0].message.startswith("Today's menu averages 2.0kg CO₂ per item.")
