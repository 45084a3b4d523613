"""Impact calculator.

Turns a logged meal into a carbon-saved delta and the next UserStats.

Business rules:
- Plant-based meals are credited 50% of their footprint as saved carbon,
  mixed or animal-based meals 20%.
- Every logged meal adds 3 impact points, saturating at 100.
- The streak counts consecutive calendar days with at least one meal.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Sequence
from uuid import uuid4

from ecotaste.domain.tracking.entities import (
    ActivityRecord,
    FoodSnapshot,
    MealRecord,
    MealSource,
    UserStats,
)

PLANT_BASED_SAVINGS_RATE = 0.5
MIXED_SAVINGS_RATE = 0.2
IMPACT_SCORE_STEP = 3
MAX_IMPACT_SCORE = 100

PLANT_BASED_ACTION = "Logged plant-based meal"
MIXED_ACTION = "Logged eco-friendly meal"


@dataclass(frozen=True)
class MealLogResult:
    """Outcome of logging one meal: the record, next stats and feed entry."""

    meal: MealRecord
    stats: UserStats
    activity: ActivityRecord
    carbon_saved: float


def carbon_saved_for(total_carbon: float, is_plant_based: bool) -> float:
    """Carbon credited for a meal.

    Examples:
        >>> carbon_saved_for(1.2, True)
        0.6
        >>> carbon_saved_for(2.5, False)
        0.5
    """
    rate = PLANT_BASED_SAVINGS_RATE if is_plant_based else MIXED_SAVINGS_RATE
    return total_carbon * rate


def next_streak(
    current_streak: int,
    last_activity: Optional[datetime],
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> int:
    """Streak after an activity at ``now``.

    Calendar days are compared in ``tz``. Yesterday is the calendar day of
    ``now - 24h``.

    - last activity yesterday: streak + 1
    - last activity today: unchanged
    - anything else (older, or never): 1
    """
    today = now.astimezone(tz).date()
    yesterday = (now - timedelta(hours=24)).astimezone(tz).date()
    last_day = last_activity.astimezone(tz).date() if last_activity else None

    if last_day == yesterday:
        return current_streak + 1
    if last_day != today:
        return 1
    return current_streak


def advance_stats(
    stats: UserStats,
    carbon_saved: float,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> UserStats:
    """Apply one meal log to the stats aggregate."""
    return replace(
        stats,
        carbon_saved=stats.carbon_saved + carbon_saved,
        meals_tracked=stats.meals_tracked + 1,
        impact_score=min(MAX_IMPACT_SCORE, stats.impact_score + IMPACT_SCORE_STEP),
        current_streak=next_streak(stats.current_streak, stats.last_activity_date, now, tz),
        last_activity_date=now,
        version=stats.version + 1,
    )


def log_meal(
    account_id: str,
    foods: Sequence[FoodSnapshot],
    stats: UserStats,
    now: Optional[datetime] = None,
    source: MealSource = MealSource.MANUAL,
    tz: tzinfo = timezone.utc,
) -> MealLogResult:
    """Build the meal record, next stats and activity entry for a meal.

    Pure: nothing is persisted here. An empty ``foods`` list produces a
    zero-carbon, vacuously plant-based meal; callers that must reject empty
    meals do so before calling.

    Example:
        >>> result = log_meal("student-1", [soup, rice], UserStats())
        >>> result.stats.meals_tracked
        1
    """
    now = now or datetime.now(timezone.utc)

    meal = MealRecord(
        id=uuid4(),
        account_id=account_id,
        timestamp=now,
        foods=tuple(foods),
        source=source,
    )
    saved = carbon_saved_for(meal.total_carbon, meal.is_plant_based)
    activity = ActivityRecord(
        id=uuid4(),
        action=PLANT_BASED_ACTION if meal.is_plant_based else MIXED_ACTION,
        carbon_saved=saved,
        timestamp=now,
    )
    return MealLogResult(
        meal=meal,
        stats=advance_stats(stats, saved, now, tz),
        activity=activity,
        carbon_saved=saved,
    )
