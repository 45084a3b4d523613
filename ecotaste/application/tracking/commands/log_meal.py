"""Log meal command and handler.

Logs a meal from a list of foods, either entered manually or confirmed
after a photo scan (step 2 of the scan flow).
"""

from dataclasses import dataclass
from typing import List, Tuple

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import EmptyMealError
from ecotaste.domain.tracking.entities import FoodSnapshot, MealSource
from ecotaste.domain.tracking.impact_calculator import MealLogResult
from ..orchestrators.meal_logging_orchestrator import MealLoggingOrchestrator


@dataclass(frozen=True)
class FoodInput:
    """Raw food as received from the API."""

    name: str
    category: str
    carbon_footprint: float
    is_plant_based: bool


@dataclass(frozen=True)
class LogMealCommand:
    """
    Command: Log a meal.

    Attributes:
        account: Caller identity
        foods: Foods eaten, at least one
        source: MANUAL, or PHOTO when confirming a scan
    """

    account: AccountContext
    foods: Tuple[FoodInput, ...]
    source: MealSource = MealSource.MANUAL


def to_snapshots(foods: Tuple[FoodInput, ...]) -> List[FoodSnapshot]:
    """Validate raw foods and convert them to snapshots.

    Raises:
        EmptyMealError: No foods
        InvalidCategoryError: Unknown category
        InvalidFoodError: Blank name or negative carbon
    """
    if not foods:
        raise EmptyMealError("A meal needs at least one food")
    return [
        FoodSnapshot(
            name=food.name.strip(),
            category=FoodCategory.parse(food.category),
            carbon_footprint=float(food.carbon_footprint),
            is_plant_based=food.is_plant_based,
        )
        for food in foods
    ]


class LogMealCommandHandler:
    """Handler for LogMealCommand."""

    def __init__(self, orchestrator: MealLoggingOrchestrator):
        self._orchestrator = orchestrator

    async def handle(self, command: LogMealCommand) -> MealLogResult:
        """
        Validate the foods, then log the meal.

        Validation runs before any read or write, so a rejected command
        leaves the ledger untouched.

        Example:
            >>> command = LogMealCommand(
            ...     account=AccountContext("student-1"),
            ...     foods=(FoodInput("Lentil Soup", "protein", 0.4, True),),
            ... )
            >>> result = await handler.handle(command)
            >>> result.carbon_saved
            0.2
        """
        snapshots = to_snapshots(command.foods)
        return await self._orchestrator.log(
            command.account.account_id, snapshots, command.source
        )
