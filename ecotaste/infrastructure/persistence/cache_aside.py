"""Two-tier cache-aside ledger repository.

Precedence:
1. In-process TTL cache (cachetools)
2. Durable repository (MongoDB or in-memory)

Reads consult the cache first and fall back to the durable tier on a
miss, populating the cache. Writes go to the durable tier first; the cache
is refreshed only after the durable tier confirmed. A failed durable write
raises PersistenceError and leaves the cache untouched, so cached stats
never run ahead of the ledger.
"""

from datetime import datetime
from typing import Any, Awaitable, Callable, Hashable, List, Optional, Tuple, TypeVar

import structlog
from cachetools import TTLCache

from ecotaste.domain.insights.entities import PopularityRecord, WasteRecord
from ecotaste.domain.shared.errors import EcoTasteError, StatsConflictError
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.tracking.entities import ActivityRecord, MealRecord, UserStats
from ecotaste.infrastructure.persistence.errors import PersistenceError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CacheAsideLedgerRepository:
    """ILedgerRepository decorating a durable repository with a TTL cache.

    Cached per account: stats, activity feed, popularity and waste lists.
    Meal history pages and the leaderboard always read the durable tier.
    """

    def __init__(
        self,
        durable: ILedgerRepository,
        ttl_seconds: float = 60,
        maxsize: int = 4096,
    ) -> None:
        self._durable = durable
        self._cache: TTLCache[Hashable, Any] = TTLCache(maxsize=maxsize, ttl=ttl_seconds)

    @property
    def durable(self) -> ILedgerRepository:
        return self._durable

    async def _read(self, key: Tuple[str, str], load: Callable[[], Awaitable[T]]) -> T:
        if key in self._cache:
            logger.debug("Cache hit", key=key)
            return self._cache[key]

        logger.debug("Cache miss", key=key)
        value = await self._guard("read", load)
        self._cache[key] = value
        return value

    async def _guard(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except (EcoTasteError, PersistenceError):
            raise
        except Exception as e:
            logger.error("Durable tier failed", operation=operation, error=str(e))
            raise PersistenceError(f"Durable {operation} failed: {e}") from e

    def invalidate(self, account_id: Optional[str] = None) -> None:
        """Drop cached entries of one account, or everything."""
        if account_id is None:
            self._cache.clear()
            return
        for key in [k for k in self._cache.keys() if k[1] == account_id]:
            self._cache.pop(key, None)

    async def get_stats(self, account_id: str) -> UserStats:
        return await self._read(("stats", account_id), lambda: self._durable.get_stats(account_id))

    async def commit_meal(
        self,
        account_id: str,
        meal: MealRecord,
        stats: UserStats,
        activity: ActivityRecord,
        expected_version: int,
    ) -> None:
        try:
            await self._guard(
                "commit_meal",
                lambda: self._durable.commit_meal(
                    account_id, meal, stats, activity, expected_version
                ),
            )
        except StatsConflictError:
            # Cached stats are stale, the next read reloads them
            self._cache.pop(("stats", account_id), None)
            raise

        self._cache[("stats", account_id)] = stats
        self._cache.pop(("activities", account_id), None)
        logger.debug("Cache refreshed", account_id=account_id, version=stats.version)

    async def list_meals(
        self, account_id: str, limit: Optional[int] = 20, offset: int = 0
    ) -> List[MealRecord]:
        return await self._guard(
            "list_meals", lambda: self._durable.list_meals(account_id, limit=limit, offset=offset)
        )

    async def list_activities(self, account_id: str) -> List[ActivityRecord]:
        activities = await self._read(
            ("activities", account_id), lambda: self._durable.list_activities(account_id)
        )
        return list(activities)

    async def list_popularity(self, account_id: str) -> List[PopularityRecord]:
        records = await self._read(
            ("popularity", account_id), lambda: self._durable.list_popularity(account_id)
        )
        return list(records)

    async def increment_selection(
        self, account_id: str, item_id: str, item_name: str, now: datetime
    ) -> PopularityRecord:
        record = await self._guard(
            "increment_selection",
            lambda: self._durable.increment_selection(account_id, item_id, item_name, now),
        )
        self._cache.pop(("popularity", account_id), None)
        return record

    async def append_waste(self, account_id: str, record: WasteRecord) -> None:
        await self._guard("append_waste", lambda: self._durable.append_waste(account_id, record))
        self._cache.pop(("waste", account_id), None)

    async def list_waste(self, account_id: str) -> List[WasteRecord]:
        records = await self._read(
            ("waste", account_id), lambda: self._durable.list_waste(account_id)
        )
        return list(records)

    async def list_all_stats(self) -> List[Tuple[str, UserStats]]:
        return await self._guard("list_all_stats", self._durable.list_all_stats)
