"""Unit tests for food categories, menu items and food snapshots."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from ecotaste.domain.menu.catalog import COMMON_FOODS, default_menu
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.menu.menu_item import MenuItem
from ecotaste.domain.shared.errors import (
    InvalidCategoryError,
    InvalidFoodError,
    ValidationError,
)
from ecotaste.domain.tracking.entities import FoodSnapshot, MealRecord


class TestFoodCategory:
    """Category parsing."""

    def test_parse_is_case_insensitive(self) -> None:
        assert FoodCategory.parse("Vegetables") is FoodCategory.VEGETABLES
        assert FoodCategory.parse(" PROTEIN ") is FoodCategory.PROTEIN

    def test_parse_accepts_singular_beverage(self) -> None:
        """The detector spells beverages in the singular."""
        assert FoodCategory.parse("beverage") is FoodCategory.BEVERAGES

    def test_parse_unknown_category(self) -> None:
        with pytest.raises(InvalidCategoryError, match="pizza"):
            FoodCategory.parse("pizza")

    def test_invalid_category_is_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            FoodCategory.parse("")

    def test_dessert_is_not_a_menu_category(self) -> None:
        assert FoodCategory.DESSERT.is_menu_category is False
        assert FoodCategory.FRUITS.is_menu_category is True


class TestMenuItem:
    """MenuItem invariants."""

    def test_create_generates_id_and_strips_name(self) -> None:
        item = MenuItem.create("  Tofu Stir Fry ", FoodCategory.PROTEIN, 0.6, True)

        assert item.name == "Tofu Stir Fry"
        assert len(item.id) == 32
        assert item.added_date.tzinfo is not None

    def test_negative_footprint_rejected(self) -> None:
        with pytest.raises(InvalidFoodError, match="negative"):
            MenuItem.create("Steak", FoodCategory.PROTEIN, -1.0, False)

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(InvalidFoodError):
            MenuItem.create("   ", FoodCategory.PROTEIN, 1.0, False)

    def test_dessert_rejected(self) -> None:
        with pytest.raises(InvalidFoodError, match="dessert"):
            MenuItem.create("Brownie", FoodCategory.DESSERT, 1.0, False)

    def test_to_snapshot_copies_fields(self) -> None:
        item = MenuItem.create("Quinoa", FoodCategory.GRAINS, 0.5, True)

        snapshot = item.to_snapshot()

        assert snapshot == FoodSnapshot("Quinoa", FoodCategory.GRAINS, 0.5, True)


class TestFoodSnapshot:
    def test_negative_footprint_rejected(self) -> None:
        with pytest.raises(InvalidFoodError):
            FoodSnapshot("Soup", FoodCategory.PROTEIN, -0.1, True)

    def test_dessert_is_allowed(self) -> None:
        """Detected desserts can be logged even though they are never on the menu."""
        snapshot = FoodSnapshot("Brownie", FoodCategory.DESSERT, 1.1, False)

        assert snapshot.category is FoodCategory.DESSERT


class TestMealRecord:
    def test_totals_are_derived_from_foods(self) -> None:
        meal = MealRecord(
            id=uuid4(),
            account_id="student-1",
            timestamp=datetime(2025, 3, 10, tzinfo=timezone.utc),
            foods=(
                FoodSnapshot("Grilled Chicken", FoodCategory.PROTEIN, 2.5, False),
                FoodSnapshot("Garden Salad", FoodCategory.VEGETABLES, 0.2, True),
            ),
        )

        assert meal.total_carbon == pytest.approx(2.7)
        assert meal.is_plant_based is False

    def test_naive_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            MealRecord(
                id=uuid4(),
                account_id="student-1",
                timestamp=datetime(2025, 3, 10),
                foods=(),
            )


class TestCatalog:
    def test_default_menu(self) -> None:
        """Eight seed items with stable ids, six of them plant-based."""
        menu = default_menu()

        assert [item.id for item in menu] == [str(i) for i in range(1, 9)]
        assert sum(1 for item in menu if item.is_plant_based) == 6
        assert menu[5].name == "Beef Burger"
        assert menu[5].carbon_footprint == 4.5

    def test_common_foods(self) -> None:
        assert len(COMMON_FOODS) == 26
        assert all(food.category.is_menu_category for food in COMMON_FOODS)
