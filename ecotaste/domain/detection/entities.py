"""Detected food value object."""

from dataclasses import dataclass

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import InvalidFoodError
from ecotaste.domain.tracking.entities import FoodSnapshot


@dataclass(frozen=True)
class DetectedFood:
    """Candidate food item returned by a detection provider.

    Unlike menu items, detected foods may be desserts.
    """

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidFoodError("Detected food name cannot be empty")
        if self.carbon_footprint < 0:
            raise InvalidFoodError(
                f"Carbon footprint cannot be negative, got {self.carbon_footprint}"
            )

    def to_snapshot(self) -> FoodSnapshot:
        return FoodSnapshot(
            name=self.name,
            category=self.category,
            carbon_footprint=self.carbon_footprint,
            is_plant_based=self.is_plant_based,
        )
