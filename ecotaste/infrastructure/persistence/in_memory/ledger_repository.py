"""In-memory ledger repository implementation.

Dictionary-based storage of the per-account ledger, for development and
tests. Values are deep-copied in and out so callers cannot alias stored
state.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ecotaste.domain.insights.aggregator import record_selection
from ecotaste.domain.insights.entities import PopularityRecord, WasteRecord
from ecotaste.domain.shared.errors import StatsConflictError
from ecotaste.domain.shared.ports.ledger_repository import ACTIVITY_FEED_LIMIT
from ecotaste.domain.tracking.entities import ActivityRecord, MealRecord, UserStats


@dataclass
class _AccountLedger:
    stats: UserStats = field(default_factory=UserStats)
    meals: List[MealRecord] = field(default_factory=list)
    activities: List[ActivityRecord] = field(default_factory=list)
    popularity: Dict[str, PopularityRecord] = field(default_factory=dict)
    waste: List[WasteRecord] = field(default_factory=list)


class InMemoryLedgerRepository:
    """
    In-memory implementation of ILedgerRepository port.

    Thread safety: NOT thread-safe. Safe within one event loop because no
    method awaits between reading and writing an account.
    Persistence: Data lost on process restart.

    Example:
        >>> repository = InMemoryLedgerRepository()
        >>> stats = await repository.get_stats("student-1")
        >>> stats.version
        0
    """

    def __init__(self) -> None:
        # dict order is registration order (used by the leaderboard)
        self._accounts: Dict[str, _AccountLedger] = {}

    def _ledger(self, account_id: str) -> _AccountLedger:
        return self._accounts.setdefault(account_id, _AccountLedger())

    async def get_stats(self, account_id: str) -> UserStats:
        ledger = self._accounts.get(account_id)
        return deepcopy(ledger.stats) if ledger else UserStats()

    async def commit_meal(
        self,
        account_id: str,
        meal: MealRecord,
        stats: UserStats,
        activity: ActivityRecord,
        expected_version: int,
    ) -> None:
        current = self._accounts.get(account_id)
        current_version = current.stats.version if current else 0
        if current_version != expected_version:
            raise StatsConflictError(
                f"Stats of {account_id} changed concurrently "
                f"(expected version {expected_version}, found {current_version})"
            )

        ledger = self._ledger(account_id)
        ledger.meals.append(deepcopy(meal))
        ledger.stats = deepcopy(stats)
        ledger.activities.insert(0, deepcopy(activity))
        del ledger.activities[ACTIVITY_FEED_LIMIT:]

    async def list_meals(
        self, account_id: str, limit: Optional[int] = 20, offset: int = 0
    ) -> List[MealRecord]:
        ledger = self._accounts.get(account_id)
        if ledger is None:
            return []
        meals = sorted(reversed(ledger.meals), key=lambda m: m.timestamp, reverse=True)
        end = None if limit is None else offset + limit
        return deepcopy(meals[offset:end])

    async def list_activities(self, account_id: str) -> List[ActivityRecord]:
        ledger = self._accounts.get(account_id)
        return deepcopy(ledger.activities) if ledger else []

    async def list_popularity(self, account_id: str) -> List[PopularityRecord]:
        ledger = self._accounts.get(account_id)
        return deepcopy(list(ledger.popularity.values())) if ledger else []

    async def increment_selection(
        self, account_id: str, item_id: str, item_name: str, now: datetime
    ) -> PopularityRecord:
        # No await between read and write, so concurrent selects cannot interleave
        ledger = self._ledger(account_id)
        records = record_selection(list(ledger.popularity.values()), item_id, item_name, now=now)
        ledger.popularity = {record.item_id: record for record in records}
        return deepcopy(ledger.popularity[item_id])

    async def append_waste(self, account_id: str, record: WasteRecord) -> None:
        self._ledger(account_id).waste.append(deepcopy(record))

    async def list_waste(self, account_id: str) -> List[WasteRecord]:
        ledger = self._accounts.get(account_id)
        return deepcopy(ledger.waste) if ledger else []

    async def list_all_stats(self) -> List[Tuple[str, UserStats]]:
        return [
            (account_id, deepcopy(ledger.stats))
            for account_id, ledger in self._accounts.items()
            if ledger.stats.meals_tracked > 0
        ]

    def clear(self) -> None:
        """Clear all data (testing utility)."""
        self._accounts.clear()
