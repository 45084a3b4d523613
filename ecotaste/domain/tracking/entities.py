"""Tracking entities: food snapshots, meal records, activity feed, stats."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import InvalidFoodError


class MealSource(str, Enum):
    """How a meal was logged."""

    MANUAL = "manual"
    MENU = "menu"
    PHOTO = "photo"


@dataclass(frozen=True)
class FoodSnapshot:
    """
    Value object: copy of one food as it was when the meal was logged.

    Invariants:
    - carbon_footprint >= 0
    - name is not blank
    """

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidFoodError("Food name cannot be empty")
        if self.carbon_footprint < 0:
            raise InvalidFoodError(
                f"Carbon footprint cannot be negative, got {self.carbon_footprint}"
            )


@dataclass(frozen=True)
class MealRecord:
    """
    Entity: one logging action.

    Created once and never mutated. Totals are derived from the snapshots
    on every access, so they cannot drift from their inputs.

    Example:
        MealRecord
        ├─ FoodSnapshot "Lentil Soup" (0.4 kg, plant-based)
        └─ FoodSnapshot "Brown Rice"  (0.8 kg, plant-based)
        total_carbon = 1.2, is_plant_based = True
    """

    id: UUID
    account_id: str
    timestamp: datetime
    foods: Tuple[FoodSnapshot, ...]
    source: MealSource = MealSource.MANUAL

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            raise ValueError("Timestamp must be timezone-aware (use UTC)")

    @property
    def total_carbon(self) -> float:
        return sum(f.carbon_footprint for f in self.foods)

    @property
    def is_plant_based(self) -> bool:
        # Vacuously true for an empty meal
        return all(f.is_plant_based for f in self.foods)


@dataclass(frozen=True)
class ActivityRecord:
    """Entry of the per-account activity feed."""

    id: UUID
    action: str
    carbon_saved: float
    timestamp: datetime


@dataclass(frozen=True)
class UserStats:
    """
    Aggregate: cumulative impact of an account.

    Updated incrementally on every meal log, never recomputed from the
    ledger. ``version`` is the optimistic concurrency token checked by the
    repository when the next state is written.

    Invariants:
    - 0 <= impact_score <= 100
    - last_activity_date is timezone-aware when set
    """

    carbon_saved: float = 0.0
    meals_tracked: int = 0
    impact_score: int = 0
    current_streak: int = 0
    last_activity_date: Optional[datetime] = None
    version: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.impact_score <= 100:
            raise ValueError(f"impact_score must be within [0, 100], got {self.impact_score}")
        if self.last_activity_date is not None and self.last_activity_date.tzinfo is None:
            raise ValueError("last_activity_date must be timezone-aware (use UTC)")
