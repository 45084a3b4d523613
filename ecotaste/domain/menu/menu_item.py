"""MenuItem entity - one dish offered by the cafeteria."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import InvalidFoodError
from ecotaste.domain.tracking.entities import FoodSnapshot


@dataclass(frozen=True)
class MenuItem:
    """
    Entity: dish on today's cafeteria menu.

    Immutable once created. Meals logged against an item keep a
    FoodSnapshot copy, so removing or re-adding an item never rewrites
    history.

    Invariants:
    - carbon_footprint >= 0 (kg CO2 per serving)
    - name is not blank
    - category is a menu category (not dessert)
    - added_date is timezone-aware
    """

    id: str
    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool
    added_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidFoodError("Menu item name cannot be empty")
        if self.carbon_footprint < 0:
            raise InvalidFoodError(
                f"Carbon footprint cannot be negative, got {self.carbon_footprint}"
            )
        if not self.category.is_menu_category:
            raise InvalidFoodError(f"{self.category.value} cannot be offered on the menu")
        if self.added_date.tzinfo is None:
            raise ValueError("added_date must be timezone-aware (use UTC)")

    @classmethod
    def create(
        cls,
        name: str,
        category: FoodCategory,
        carbon_footprint: float,
        is_plant_based: bool,
    ) -> "MenuItem":
        """Create a new item with a generated id and the current date."""
        return cls(
            id=uuid4().hex,
            name=name.strip() if name else name,
            category=category,
            carbon_footprint=float(carbon_footprint),
            is_plant_based=is_plant_based,
        )

    def to_snapshot(self) -> FoodSnapshot:
        """Copy the fields a meal record keeps about this item."""
        return FoodSnapshot(
            name=self.name,
            category=self.category,
            carbon_footprint=self.carbon_footprint,
            is_plant_based=self.is_plant_based,
        )
