"""Meal logging orchestrator.

Shared workflow of every command that ends with a meal in the ledger
(manual log, menu selection, confirmed photo scan):

1. Read current stats (and their version)
2. Compute meal, next stats and activity entry (pure calculator)
3. Commit them as one write, guarded by the stats version
4. Publish MealLogged
"""

import logging
from datetime import timezone, tzinfo
from typing import Sequence

from ecotaste.domain.shared.events import MealLogged
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.tracking.entities import FoodSnapshot, MealSource
from ecotaste.domain.tracking.impact_calculator import MealLogResult, log_meal

logger = logging.getLogger(__name__)


class MealLoggingOrchestrator:
    """Coordinates calculator, ledger and event bus for a meal log."""

    def __init__(
        self,
        repository: ILedgerRepository,
        event_bus: IEventBus,
        tz: tzinfo = timezone.utc,
    ):
        """
        Args:
            repository: Ledger repository port
            event_bus: Event bus port
            tz: Timezone in which streak calendar days are counted
        """
        self._repository = repository
        self._event_bus = event_bus
        self._tz = tz

    async def log(
        self,
        account_id: str,
        foods: Sequence[FoodSnapshot],
        source: MealSource,
    ) -> MealLogResult:
        """
        Log a meal for an account.

        Raises:
            StatsConflictError: Stats changed concurrently, nothing written
            PersistenceError: Storage failure, nothing advanced
        """
        stats = await self._repository.get_stats(account_id)
        result = log_meal(account_id, foods, stats, source=source, tz=self._tz)

        await self._repository.commit_meal(
            account_id,
            result.meal,
            result.stats,
            result.activity,
            expected_version=stats.version,
        )

        logger.info(
            "Meal logged",
            extra={
                "account_id": account_id,
                "meal_id": str(result.meal.id),
                "source": source.value,
                "food_count": len(result.meal.foods),
                "total_carbon": result.meal.total_carbon,
                "carbon_saved": result.carbon_saved,
                "current_streak": result.stats.current_streak,
            },
        )

        await self._event_bus.publish(
            MealLogged.create(
                account_id=account_id,
                meal_id=result.meal.id,
                source=source.value,
                total_carbon=result.meal.total_carbon,
                carbon_saved=result.carbon_saved,
                is_plant_based=result.meal.is_plant_based,
                current_streak=result.stats.current_streak,
            )
        )
        return result
