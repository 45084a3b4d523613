"""Reference menu data.

DEFAULT_MENU seeds a catalog that has never been saved. COMMON_FOODS is the
quick-add list offered to cafeteria staff, with typical per-serving carbon
footprints in kg CO2.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Tuple

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.menu.menu_item import MenuItem

P = FoodCategory.PROTEIN
V = FoodCategory.VEGETABLES
G = FoodCategory.GRAINS
D = FoodCategory.DAIRY
F = FoodCategory.FRUITS
B = FoodCategory.BEVERAGES


@dataclass(frozen=True)
class CommonFood:
    """Quick-add template for a menu item."""

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool


_DEFAULT_MENU_ROWS: Tuple[Tuple[str, str, FoodCategory, float, bool], ...] = (
    ("1", "Grilled Chicken", P, 2.5, False),
    ("2", "Vegetable Stir Fry", V, 0.5, True),
    ("3", "Lentil Soup", P, 0.4, True),
    ("4", "Brown Rice", G, 0.8, True),
    ("5", "Garden Salad", V, 0.2, True),
    ("6", "Beef Burger", P, 4.5, False),
    ("7", "Mashed Potatoes", V, 0.3, True),
    ("8", "Apple Slices", F, 0.1, True),
)


def default_menu() -> List[MenuItem]:
    """Build the seed menu, stamped with the current date."""
    now = datetime.now(timezone.utc)
    return [
        MenuItem(
            id=item_id,
            name=name,
            category=category,
            carbon_footprint=carbon,
            is_plant_based=plant_based,
            added_date=now,
        )
        for item_id, name, category, carbon, plant_based in _DEFAULT_MENU_ROWS
    ]


COMMON_FOODS: Tuple[CommonFood, ...] = (
    CommonFood("Grilled Chicken", P, 2.5, False),
    CommonFood("Beef Burger", P, 4.5, False),
    CommonFood("Fish Fillet", P, 1.8, False),
    CommonFood("Lentil Soup", P, 0.4, True),
    CommonFood("Bean Burrito", P, 0.5, True),
    CommonFood("Tofu Stir Fry", P, 0.6, True),
    CommonFood("Scrambled Eggs", P, 1.5, False),
    CommonFood("Garden Salad", V, 0.2, True),
    CommonFood("Steamed Broccoli", V, 0.3, True),
    CommonFood("Roasted Carrots", V, 0.2, True),
    CommonFood("Mashed Potatoes", V, 0.3, True),
    CommonFood("Corn on the Cob", V, 0.3, True),
    CommonFood("Brown Rice", G, 0.8, True),
    CommonFood("Pasta", G, 0.6, True),
    CommonFood("Whole Wheat Bread", G, 0.3, True),
    CommonFood("Quinoa", G, 0.5, True),
    CommonFood("Mac & Cheese", D, 1.8, False),
    CommonFood("Cheese Pizza", D, 2.2, False),
    CommonFood("Yogurt Parfait", D, 1.2, False),
    CommonFood("Apple Slices", F, 0.1, True),
    CommonFood("Orange Wedges", F, 0.1, True),
    CommonFood("Banana", F, 0.1, True),
    CommonFood("Fruit Cup", F, 0.2, True),
    CommonFood("Milk", B, 0.8, False),
    CommonFood("Orange Juice", B, 0.3, True),
    CommonFood("Water", B, 0.01, True),
)
