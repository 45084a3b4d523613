"""GraphQL types for the cafeteria menu.

These types support:
- Menu listing and the common foods quick-add list
- Menu mutations (cafeteria staff only)
"""

from __future__ import annotations

from typing import Annotated, Optional, Union
from datetime import datetime
from enum import Enum
import strawberry

from ecotaste.domain.menu.catalog import CommonFood as DomainCommonFood
from ecotaste.domain.menu.food_category import FoodCategory as DomainFoodCategory
from ecotaste.domain.menu.menu_item import MenuItem as DomainMenuItem
from ecotaste.domain.shared.account import Role as DomainRole


__all__ = [
    # Enums
    "FoodCategory",
    "AccountRole",
    # Object types
    "MenuItem",
    "CommonFood",
    # Input types
    "AddMenuItemInput",
    "RemoveMenuItemInput",
    "ClearMenuInput",
    # Result types
    "MenuItemSuccess",
    "MenuItemError",
    "RemoveMenuItemSuccess",
    "RemoveMenuItemError",
    "ClearMenuSuccess",
    "ClearMenuError",
    "AddMenuItemResult",
    "RemoveMenuItemResult",
    "ClearMenuResult",
    # Mappers
    "map_category",
    "map_menu_item",
    "map_common_food",
    "to_domain_role",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class FoodCategory(Enum):
    """Food category."""

    PROTEIN = "protein"
    VEGETABLES = "vegetables"
    GRAINS = "grains"
    DAIRY = "dairy"
    FRUITS = "fruits"
    BEVERAGES = "beverages"
    DESSERT = "dessert"


@strawberry.enum
class AccountRole(Enum):
    """Role used when authentication is disabled."""

    STUDENT = "student"
    CAFETERIA = "cafeteria"


# ============================================
# OBJECT TYPES
# ============================================


@strawberry.type
class MenuItem:
    """Dish on today's menu."""

    id: str
    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool
    added_date: datetime


@strawberry.type
class CommonFood:
    """Quick-add template with a typical carbon footprint."""

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool


# ============================================
# MUTATION INPUT TYPES
# ============================================


@strawberry.input
class AddMenuItemInput:
    """Input for add menu item mutation.

    ``category`` is parsed case-insensitively ("beverage" is accepted).
    """

    name: str
    category: str
    carbon_footprint: float
    is_plant_based: bool
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


@strawberry.input
class RemoveMenuItemInput:
    """Input for remove menu item mutation."""

    item_id: str
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


@strawberry.input
class ClearMenuInput:
    """Input for clear menu mutation."""

    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


# ============================================
# MUTATION RESULT TYPES
# ============================================


@strawberry.type
class MenuItemSuccess:
    item: MenuItem


@strawberry.type
class MenuItemError:
    message: str
    code: str = "ADD_MENU_ITEM_FAILED"


@strawberry.type
class RemoveMenuItemSuccess:
    item_id: str
    message: str = "Menu item removed"


@strawberry.type
class RemoveMenuItemError:
    message: str
    code: str = "REMOVE_MENU_ITEM_FAILED"


@strawberry.type
class ClearMenuSuccess:
    message: str = "Menu cleared"


@strawberry.type
class ClearMenuError:
    message: str
    code: str = "CLEAR_MENU_FAILED"


AddMenuItemResult = Annotated[
    Union[MenuItemSuccess, MenuItemError],
    strawberry.union("AddMenuItemResult"),
]

RemoveMenuItemResult = Annotated[
    Union[RemoveMenuItemSuccess, RemoveMenuItemError],
    strawberry.union("RemoveMenuItemResult"),
]

ClearMenuResult = Annotated[
    Union[ClearMenuSuccess, ClearMenuError],
    strawberry.union("ClearMenuResult"),
]


# ============================================
# MAPPERS
# ============================================


def map_category(category: DomainFoodCategory) -> FoodCategory:
    return FoodCategory(category.value)


def map_menu_item(item: DomainMenuItem) -> MenuItem:
    return MenuItem(
        id=item.id,
        name=item.name,
        category=map_category(item.category),
        carbon_footprint=item.carbon_footprint,
        is_plant_based=item.is_plant_based,
        added_date=item.added_date,
    )


def map_common_food(food: DomainCommonFood) -> CommonFood:
    return CommonFood(
        name=food.name,
        category=map_category(food.category),
        carbon_footprint=food.carbon_footprint,
        is_plant_based=food.is_plant_based,
    )


def to_domain_role(role: Optional[AccountRole]) -> Optional[DomainRole]:
    return DomainRole(role.value) if role is not None else None
