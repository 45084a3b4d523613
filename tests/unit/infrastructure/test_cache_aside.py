"""Unit tests for the cache-aside ledger repository."""

from unittest.mock import AsyncMock

import pytest

from ecotaste.domain.insights.entities import PopularityRecord
from ecotaste.domain.shared.errors import StatsConflictError
from ecotaste.domain.tracking.entities import UserStats
from ecotaste.domain.tracking.impact_calculator import log_meal
from ecotaste.infrastructure.persistence.cache_aside import CacheAsideLedgerRepository
from ecotaste.infrastructure.persistence.errors import PersistenceError


@pytest.fixture
def durable() -> AsyncMock:
    repository = AsyncMock()
    repository.get_stats.return_value = UserStats(
        carbon_saved=0.6, meals_tracked=1, impact_score=3, current_streak=1, version=1
    )
    repository.list_popularity.return_value = []
    return repository


@pytest.fixture
def repository(durable) -> CacheAsideLedgerRepository:
    return CacheAsideLedgerRepository(durable, ttl_seconds=60)


class TestCacheAsideLedgerRepository:
    """Test CacheAsideLedgerRepository."""

    @pytest.mark.asyncio
    async def test_read_populates_cache(self, repository, durable) -> None:
        first = await repository.get_stats("student-1")
        second = await repository.get_stats("student-1")

        assert first == second
        assert first.version == 1
        durable.get_stats.assert_called_once_with("student-1")

    @pytest.mark.asyncio
    async def test_commit_refreshes_cache_after_durable_write(
        self, repository, durable, plant_based_foods, now
    ) -> None:
        stats = await repository.get_stats("student-1")
        result = log_meal("student-1", plant_based_foods, stats, now=now)

        await repository.commit_meal(
            "student-1", result.meal, result.stats, result.activity, expected_version=1
        )

        durable.commit_meal.assert_called_once()
        cached = await repository.get_stats("student-1")
        assert cached.version == 2
        assert cached.meals_tracked == 2
        durable.get_stats.assert_called_once()

    @pytest.mark.asyncio
    async def test_failed_durable_write_leaves_cache_untouched(
        self, repository, durable, plant_based_foods, now
    ) -> None:
        """Cached stats never run ahead of the durable tier."""
        stats = await repository.get_stats("student-1")
        result = log_meal("student-1", plant_based_foods, stats, now=now)
        durable.commit_meal.side_effect = RuntimeError("connection reset")

        with pytest.raises(PersistenceError, match="connection reset"):
            await repository.commit_meal(
                "student-1", result.meal, result.stats, result.activity, expected_version=1
            )

        assert (await repository.get_stats("student-1")).version == 1

    @pytest.mark.asyncio
    async def test_conflict_drops_cached_stats(
        self, repository, durable, plant_based_foods, now
    ) -> None:
        stats = await repository.get_stats("student-1")
        result = log_meal("student-1", plant_based_foods, stats, now=now)
        durable.commit_meal.side_effect = StatsConflictError("changed concurrently")

        with pytest.raises(StatsConflictError):
            await repository.commit_meal(
                "student-1", result.meal, result.stats, result.activity, expected_version=1
            )

        await repository.get_stats("student-1")
        assert durable.get_stats.call_count == 2

    @pytest.mark.asyncio
    async def test_durable_read_failure(self, repository, durable) -> None:
        durable.list_waste.side_effect = ConnectionError("timed out")

        with pytest.raises(PersistenceError):
            await repository.list_waste("student-1")

    @pytest.mark.asyncio
    async def test_increment_selection_invalidates(self, repository, durable, now) -> None:
        record = PopularityRecord(
            item_id="3", item_name="Lentil Soup", selections=1, last_selected=now
        )
        durable.increment_selection.return_value = record
        await repository.list_popularity("student-1")

        counted = await repository.increment_selection("student-1", "3", "Lentil Soup", now)
        await repository.list_popularity("student-1")

        assert counted == record
        durable.increment_selection.assert_called_once_with(
            "student-1", "3", "Lentil Soup", now
        )
        assert durable.list_popularity.call_count == 2

    @pytest.mark.asyncio
    async def test_failed_increment_keeps_cached_popularity(
        self, repository, durable, now
    ) -> None:
        durable.increment_selection.side_effect = ConnectionError("timed out")
        await repository.list_popularity("student-1")

        with pytest.raises(PersistenceError):
            await repository.increment_selection("student-1", "3", "Lentil Soup", now)

        await repository.list_popularity("student-1")
        durable.list_popularity.assert_called_once_with("student-1")

    @pytest.mark.asyncio
    async def test_meal_history_bypasses_cache(self, repository, durable) -> None:
        durable.list_meals.return_value = []

        await repository.list_meals("student-1", limit=5)
        await repository.list_meals("student-1", limit=5)

        assert durable.list_meals.call_count == 2

    @pytest.mark.asyncio
    async def test_invalidate_account(self, repository, durable) -> None:
        await repository.get_stats("student-1")
        await repository.get_stats("student-2")

        repository.invalidate("student-1")
        await repository.get_stats("student-1")
        await repository.get_stats("student-2")

        assert durable.get_stats.call_count == 3

    def test_durable_tier_is_exposed(self, repository, durable) -> None:
        assert repository.durable is durable
