"""Unit tests for LogMealCommandHandler and the meal logging orchestrator."""

from unittest.mock import AsyncMock

import pytest

from ecotaste.application.tracking.commands import (
    FoodInput,
    LogMealCommand,
    LogMealCommandHandler,
)
from ecotaste.application.tracking.orchestrators.meal_logging_orchestrator import (
    MealLoggingOrchestrator,
)
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.errors import (
    EmptyMealError,
    InvalidCategoryError,
    InvalidFoodError,
    StatsConflictError,
)
from ecotaste.domain.shared.events import MealLogged
from ecotaste.domain.tracking.entities import MealSource, UserStats
from ecotaste.domain.tracking.impact_calculator import log_meal

SOUP = FoodInput("Lentil Soup", "protein", 0.4, True)
RICE = FoodInput("Brown Rice", "grains", 0.8, True)


@pytest.fixture
def handler(orchestrator) -> LogMealCommandHandler:
    return LogMealCommandHandler(orchestrator=orchestrator)


class TestLogMealCommandHandler:
    """Test LogMealCommandHandler."""

    @pytest.mark.asyncio
    async def test_log_meal_success(
        self, handler, student, ledger_repository, mock_event_bus
    ) -> None:
        """Meal, stats and activity are committed, then MealLogged is published."""
        command = LogMealCommand(account=student, foods=(SOUP, RICE))

        result = await handler.handle(command)

        assert result.carbon_saved == pytest.approx(0.6)
        assert result.meal.source is MealSource.MANUAL

        stats = await ledger_repository.get_stats("student-1")
        assert stats.meals_tracked == 1
        assert stats.impact_score == 3
        assert stats.version == 1
        assert len(await ledger_repository.list_activities("student-1")) == 1

        mock_event_bus.publish.assert_called_once()
        event = mock_event_bus.publish.call_args[0][0]
        assert isinstance(event, MealLogged)
        assert event.meal_id == result.meal.id
        assert event.source == "manual"
        assert event.carbon_saved == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_confirmed_scan_is_logged_as_photo(self, handler, student) -> None:
        command = LogMealCommand(account=student, foods=(SOUP,), source=MealSource.PHOTO)

        result = await handler.handle(command)

        assert result.meal.source is MealSource.PHOTO

    @pytest.mark.asyncio
    async def test_category_normalization(self, handler, student) -> None:
        """Category strings are parsed case-insensitively, 'beverage' included."""
        command = LogMealCommand(
            account=student,
            foods=(FoodInput(" Orange Juice ", "Beverage", 0.3, True),),
        )

        result = await handler.handle(command)

        food = result.meal.foods[0]
        assert food.name == "Orange Juice"
        assert food.category is FoodCategory.BEVERAGES

    @pytest.mark.asyncio
    async def test_empty_meal_rejected(
        self, handler, student, ledger_repository, mock_event_bus
    ) -> None:
        """An empty food list is rejected before anything is written."""
        with pytest.raises(EmptyMealError):
            await handler.handle(LogMealCommand(account=student, foods=()))

        assert await ledger_repository.list_all_stats() == []
        mock_event_bus.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_negative_footprint_rejected(self, handler, student, ledger_repository) -> None:
        bad = FoodInput("Soup", "protein", -0.4, True)

        with pytest.raises(InvalidFoodError):
            await handler.handle(LogMealCommand(account=student, foods=(SOUP, bad)))

        assert (await ledger_repository.get_stats("student-1")).meals_tracked == 0

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, handler, student) -> None:
        with pytest.raises(InvalidCategoryError):
            await handler.handle(
                LogMealCommand(account=student, foods=(FoodInput("Pizza", "pizza", 2.0, False),))
            )


class TestMealLoggingOrchestrator:
    """Version-guarded commit of the meal log."""

    @pytest.mark.asyncio
    async def test_commit_uses_read_version(self, plant_based_foods, mock_event_bus) -> None:
        """The stats version read first is the one expected by the commit."""
        repository = AsyncMock()
        repository.get_stats.return_value = UserStats(
            carbon_saved=1.0, meals_tracked=1, impact_score=3, version=4
        )
        orchestrator = MealLoggingOrchestrator(repository=repository, event_bus=mock_event_bus)

        result = await orchestrator.log("student-1", plant_based_foods, MealSource.MANUAL)

        repository.commit_meal.assert_called_once()
        assert repository.commit_meal.call_args.kwargs["expected_version"] == 4
        assert result.stats.version == 5
        assert result.stats.meals_tracked == 2

    @pytest.mark.asyncio
    async def test_conflict_propagates_without_event(
        self, plant_based_foods, mock_event_bus
    ) -> None:
        """A concurrent update surfaces as StatsConflictError; nothing is published."""
        repository = AsyncMock()
        repository.get_stats.return_value = UserStats(meals_tracked=1, impact_score=3, version=1)
        repository.commit_meal.side_effect = StatsConflictError("changed concurrently")
        orchestrator = MealLoggingOrchestrator(repository=repository, event_bus=mock_event_bus)

        with pytest.raises(StatsConflictError):
            await orchestrator.log("student-1", plant_based_foods, MealSource.MANUAL)

        mock_event_bus.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_two_devices_with_same_stats_version(
        self, ledger_repository, plant_based_foods, mock_event_bus
    ) -> None:
        """The second write based on the same version is rejected, not merged."""
        orchestrator = MealLoggingOrchestrator(
            repository=ledger_repository, event_bus=mock_event_bus
        )
        await orchestrator.log("student-1", plant_based_foods, MealSource.MANUAL)
        stale = await ledger_repository.get_stats("student-1")

        await orchestrator.log("student-1", plant_based_foods, MealSource.MANUAL)

        late = log_meal("student-1", plant_based_foods, stale)
        with pytest.raises(StatsConflictError):
            await ledger_repository.commit_meal(
                "student-1", late.meal, late.stats, late.activity, expected_version=stale.version
            )

        stats = await ledger_repository.get_stats("student-1")
        assert stats.meals_tracked == 2
        assert len(await ledger_repository.list_meals("student-1")) == 2
