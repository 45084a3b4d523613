"""Get stats query - account stats summary."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict
import logging

from ecotaste.domain.insights.leaderboard import weekly_goal_progress
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.tracking.entities import UserStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetStatsQuery:
    account: AccountContext


@dataclass(frozen=True)
class StatsSummary:
    """
    Stats of an account with derived progress figures.

    Attributes:
        stats: Stored aggregate
        weekly_goal_progress: Percentage of the 10 kg weekly goal, capped at 100
        category_breakdown: Number of logged foods per category
    """

    stats: UserStats
    weekly_goal_progress: float
    category_breakdown: Dict[FoodCategory, int] = field(default_factory=dict)


class GetStatsQueryHandler:
    """Handler for GetStatsQuery."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetStatsQuery) -> StatsSummary:
        account_id = query.account.account_id
        stats = await self._repository.get_stats(account_id)
        meals = await self._repository.list_meals(account_id, limit=None)

        breakdown = Counter(food.category for meal in meals for food in meal.foods)

        logger.debug(
            "Stats retrieved",
            extra={"account_id": account_id, "meals_tracked": stats.meals_tracked},
        )

        return StatsSummary(
            stats=stats,
            weekly_goal_progress=weekly_goal_progress(stats.carbon_saved),
            category_breakdown=dict(breakdown),
        )
