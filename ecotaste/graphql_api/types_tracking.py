"""GraphQL types for meal tracking.

These types support:
- Manual meal log and menu selection
- Photo scan (detect, then confirm with logMeal source=PHOTO)
- Stats, activity feed, meal history and leaderboard queries
"""

from __future__ import annotations

from typing import Annotated, List, Optional, Union
from datetime import datetime
from enum import Enum
import strawberry

from ecotaste.application.tracking.commands.scan_meal import ScanResult
from ecotaste.application.tracking.queries.get_leaderboard import Leaderboard as DomainLeaderboard
from ecotaste.application.tracking.queries.get_stats import StatsSummary
from ecotaste.domain.insights.leaderboard import player_handle
from ecotaste.domain.tracking.entities import (
    ActivityRecord,
    FoodSnapshot,
    MealRecord,
    MealSource as DomainMealSource,
    UserStats as DomainUserStats,
)
from ecotaste.domain.tracking.impact_calculator import MealLogResult
from ecotaste.graphql_api.types_menu import AccountRole, FoodCategory, map_category


__all__ = [
    "MealSource",
    "Food",
    "Meal",
    "Activity",
    "UserStats",
    "CategoryCount",
    "StatsSummaryType",
    "LeaderboardEntry",
    "Leaderboard",
    "DetectedFood",
    # Inputs
    "FoodInput",
    "LogMealInput",
    "SelectMenuItemInput",
    "ScanMealInput",
    # Results
    "LogMealSuccess",
    "LogMealError",
    "SelectMenuItemError",
    "ScanMealSuccess",
    "ScanMealError",
    "LogMealResult",
    "SelectMenuItemResult",
    "ScanMealResult",
    # Mappers
    "map_meal",
    "map_activity",
    "map_stats",
    "map_stats_summary",
    "map_leaderboard",
    "map_log_result",
    "map_scan_result",
    "to_domain_source",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class MealSource(Enum):
    """How a meal was logged."""

    MANUAL = "manual"
    MENU = "menu"
    PHOTO = "photo"


# ============================================
# OBJECT TYPES
# ============================================


@strawberry.type
class Food:
    """Food as it was when the meal was logged."""

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool


@strawberry.type
class Meal:
    """Logged meal with derived totals."""

    id: str
    timestamp: datetime
    source: MealSource
    foods: List[Food]
    total_carbon: float
    is_plant_based: bool


@strawberry.type
class Activity:
    """Activity feed entry."""

    id: str
    action: str
    carbon_saved: float
    timestamp: datetime


@strawberry.type
class UserStats:
    """Cumulative impact of an account."""

    carbon_saved: float
    meals_tracked: int
    impact_score: int
    current_streak: int
    last_activity_date: Optional[datetime] = None


@strawberry.type
class CategoryCount:
    category: FoodCategory
    count: int


@strawberry.type(name="StatsSummary")
class StatsSummaryType:
    """Stats with weekly goal progress and category breakdown."""

    stats: UserStats
    weekly_goal_progress: float
    category_breakdown: List[CategoryCount]


@strawberry.type
class LeaderboardEntry:
    """Ranked account. Other accounts appear only by their player handle."""

    rank: int
    player: str
    is_current_account: bool
    carbon_saved: float
    meals_tracked: int
    impact_score: int


@strawberry.type
class Leaderboard:
    """Top accounts plus the caller's own rank."""

    entries: List[LeaderboardEntry]
    account_rank: int
    total_accounts: int


@strawberry.type
class DetectedFood:
    """Candidate food returned by a photo scan."""

    name: str
    category: FoodCategory
    carbon_footprint: float
    is_plant_based: bool


# ============================================
# MUTATION INPUT TYPES
# ============================================


@strawberry.input
class FoodInput:
    """Food entered manually or confirmed after a scan."""

    name: str
    category: str
    carbon_footprint: float
    is_plant_based: bool


@strawberry.input
class LogMealInput:
    """Input for log meal mutation.

    Use source=PHOTO to confirm the foods returned by scanMeal.
    """

    foods: List[FoodInput]
    source: MealSource = MealSource.MANUAL
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


@strawberry.input
class SelectMenuItemInput:
    """Input for select menu item mutation."""

    item_id: str
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


@strawberry.input
class ScanMealInput:
    """Input for scan meal mutation.

    ``image`` is a base64 data URL or an http(s) URL.
    """

    image: str
    account_id: Optional[str] = None
    role: Optional[AccountRole] = None


# ============================================
# MUTATION RESULT TYPES
# ============================================


@strawberry.type
class LogMealSuccess:
    """Logged meal with the updated stats."""

    meal: Meal
    stats: UserStats
    activity: Activity
    carbon_saved: float


@strawberry.type
class LogMealError:
    message: str
    code: str = "LOG_MEAL_FAILED"


@strawberry.type
class SelectMenuItemError:
    message: str
    code: str = "SELECT_MENU_ITEM_FAILED"


@strawberry.type
class ScanMealSuccess:
    """Detected foods. Nothing is persisted until logMeal confirms them."""

    foods: List[DetectedFood]
    total_carbon: float
    is_plant_based: bool
    estimated_carbon_saved: float


@strawberry.type
class ScanMealError:
    message: str
    code: str = "SCAN_FAILED"


LogMealResult = Annotated[
    Union[LogMealSuccess, LogMealError],
    strawberry.union("LogMealResult"),
]

SelectMenuItemResult = Annotated[
    Union[LogMealSuccess, SelectMenuItemError],
    strawberry.union("SelectMenuItemResult"),
]

ScanMealResult = Annotated[
    Union[ScanMealSuccess, ScanMealError],
    strawberry.union("ScanMealResult"),
]


# ============================================
# MAPPERS
# ============================================


def _map_food(food: FoodSnapshot) -> Food:
    return Food(
        name=food.name,
        category=map_category(food.category),
        carbon_footprint=food.carbon_footprint,
        is_plant_based=food.is_plant_based,
    )


def map_meal(meal: MealRecord) -> Meal:
    return Meal(
        id=str(meal.id),
        timestamp=meal.timestamp,
        source=MealSource(meal.source.value),
        foods=[_map_food(f) for f in meal.foods],
        total_carbon=meal.total_carbon,
        is_plant_based=meal.is_plant_based,
    )


def map_activity(activity: ActivityRecord) -> Activity:
    return Activity(
        id=str(activity.id),
        action=activity.action,
        carbon_saved=activity.carbon_saved,
        timestamp=activity.timestamp,
    )


def map_stats(stats: DomainUserStats) -> UserStats:
    return UserStats(
        carbon_saved=stats.carbon_saved,
        meals_tracked=stats.meals_tracked,
        impact_score=stats.impact_score,
        current_streak=stats.current_streak,
        last_activity_date=stats.last_activity_date,
    )


def map_stats_summary(summary: StatsSummary) -> StatsSummaryType:
    return StatsSummaryType(
        stats=map_stats(summary.stats),
        weekly_goal_progress=summary.weekly_goal_progress,
        category_breakdown=[
            CategoryCount(category=map_category(category), count=count)
            for category, count in summary.category_breakdown.items()
        ],
    )


def map_leaderboard(board: DomainLeaderboard) -> Leaderboard:
    return Leaderboard(
        entries=[
            LeaderboardEntry(
                rank=e.rank,
                player=player_handle(e.account_id),
                is_current_account=e.account_id == board.account_id,
                carbon_saved=e.carbon_saved,
                meals_tracked=e.meals_tracked,
                impact_score=e.impact_score,
            )
            for e in board.entries
        ],
        account_rank=board.account_rank,
        total_accounts=board.total_accounts,
    )


def map_log_result(result: MealLogResult) -> LogMealSuccess:
    return LogMealSuccess(
        meal=map_meal(result.meal),
        stats=map_stats(result.stats),
        activity=map_activity(result.activity),
        carbon_saved=result.carbon_saved,
    )


def map_scan_result(result: ScanResult) -> ScanMealSuccess:
    return ScanMealSuccess(
        foods=[
            DetectedFood(
                name=f.name,
                category=map_category(f.category),
                carbon_footprint=f.carbon_footprint,
                is_plant_based=f.is_plant_based,
            )
            for f in result.foods
        ],
        total_carbon=result.total_carbon,
        is_plant_based=result.is_plant_based,
        estimated_carbon_saved=result.estimated_carbon_saved,
    )


def to_domain_source(source: MealSource) -> DomainMealSource:
    return DomainMealSource(source.value)
