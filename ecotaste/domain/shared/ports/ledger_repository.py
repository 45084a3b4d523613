"""Ledger repository port (interface).

Account-scoped persistence of meals, activity feed, stats, popularity and
waste reports.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from ecotaste.domain.insights.entities import PopularityRecord, WasteRecord
from ecotaste.domain.tracking.entities import ActivityRecord, MealRecord, UserStats

ACTIVITY_FEED_LIMIT = 50


class ILedgerRepository(Protocol):
    """
    Interface for ledger persistence.

    Implementations:
    - In-memory repository (development and tests)
    - MongoDB repository (production)
    - Cache-aside wrapper over either of them

    Example usage (application layer):
        >>> stats = await repository.get_stats("student-1")
        >>> result = log_meal("student-1", foods, stats)
        >>> await repository.commit_meal(
        ...     "student-1", result.meal, result.stats, result.activity,
        ...     expected_version=stats.version,
        ... )
    """

    async def get_stats(self, account_id: str) -> UserStats:
        """
        Current stats of an account.

        Returns:
            Stored stats, or a zeroed UserStats (version 0) for a new account
        """
        ...

    async def commit_meal(
        self,
        account_id: str,
        meal: MealRecord,
        stats: UserStats,
        activity: ActivityRecord,
        expected_version: int,
    ) -> None:
        """
        Append a meal and advance stats and activity feed as one write.

        Args:
            account_id: Owner of the meal
            meal: Meal record to append
            stats: Next stats, version must be expected_version + 1
            activity: Activity entry, the feed keeps the newest 50
            expected_version: Version read before computing ``stats``

        Raises:
            StatsConflictError: Stored version differs from expected_version.
                Nothing is written.
            PersistenceError: Storage failure
        """
        ...

    async def list_meals(
        self, account_id: str, limit: Optional[int] = 20, offset: int = 0
    ) -> List[MealRecord]:
        """Meals of an account, newest first. ``limit=None`` returns all."""
        ...

    async def list_activities(self, account_id: str) -> List[ActivityRecord]:
        """Activity feed of an account, newest first, at most 50 entries."""
        ...

    async def list_popularity(self, account_id: str) -> List[PopularityRecord]:
        """Popularity records in first-selected order."""
        ...

    async def increment_selection(
        self, account_id: str, item_id: str, item_name: str, now: datetime
    ) -> PopularityRecord:
        """
        Count one more selection of an item as a single atomic write.

        Creates the record with one selection on first use. Concurrent
        increments never overwrite each other.

        Returns:
            The record after the increment

        Raises:
            PersistenceError: Storage failure
        """
        ...

    async def append_waste(self, account_id: str, record: WasteRecord) -> None:
        """Append a waste report."""
        ...

    async def list_waste(self, account_id: str) -> List[WasteRecord]:
        """Waste reports in chronological order."""
        ...

    async def list_all_stats(self) -> List[Tuple[str, UserStats]]:
        """(account_id, stats) of every account, in registration order."""
        ...
