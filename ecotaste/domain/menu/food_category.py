"""FoodCategory value object.

Closed enumeration of food categories shared by menu items, logged food
snapshots and detected foods.
"""

from enum import Enum

from ecotaste.domain.shared.errors import InvalidCategoryError


class FoodCategory(str, Enum):
    """Food category.

    The detection model spells beverages in the singular and may return
    desserts, which are never offered as menu items.

    Examples:
        >>> FoodCategory.parse("beverage")
        <FoodCategory.BEVERAGES: 'beverages'>
        >>> FoodCategory.parse("Vegetables").is_menu_category
        True
    """

    PROTEIN = "protein"
    VEGETABLES = "vegetables"
    GRAINS = "grains"
    DAIRY = "dairy"
    FRUITS = "fruits"
    BEVERAGES = "beverages"
    DESSERT = "dessert"

    @classmethod
    def parse(cls, value: str) -> "FoodCategory":
        """Parse a category string (case-insensitive, accepts 'beverage').

        Raises:
            InvalidCategoryError: If value is not a known category
        """
        normalized = (value or "").strip().lower()
        if normalized == "beverage":
            return cls.BEVERAGES
        try:
            return cls(normalized)
        except ValueError as e:
            raise InvalidCategoryError(f"Unknown food category: {value!r}") from e

    @property
    def is_menu_category(self) -> bool:
        return self is not FoodCategory.DESSERT
