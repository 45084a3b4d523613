"""Unit tests for the tracking queries: stats, feed, meal history, leaderboard."""

import pytest
from freezegun import freeze_time

from ecotaste.application.tracking.commands import (
    FoodInput,
    LogMealCommand,
    LogMealCommandHandler,
)
from ecotaste.application.tracking.queries import (
    GetActivityFeedQuery,
    GetActivityFeedQueryHandler,
    GetLeaderboardQuery,
    GetLeaderboardQueryHandler,
    GetMealHistoryQuery,
    GetMealHistoryQueryHandler,
    GetStatsQuery,
    GetStatsQueryHandler,
)
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import InvalidLimitError

SOUP = FoodInput("Lentil Soup", "protein", 0.4, True)
RICE = FoodInput("Brown Rice", "grains", 0.8, True)
CHICKEN = FoodInput("Grilled Chicken", "protein", 2.5, False)
SALAD = FoodInput("Garden Salad", "vegetables", 0.2, True)


@pytest.fixture
def log_handler(orchestrator) -> LogMealCommandHandler:
    return LogMealCommandHandler(orchestrator=orchestrator)


async def _log(handler: LogMealCommandHandler, account_id: str, *foods: FoodInput):
    return await handler.handle(
        LogMealCommand(account=AccountContext(account_id=account_id), foods=foods)
    )


class TestGetStats:
    @pytest.mark.asyncio
    async def test_new_account(self, ledger_repository, student) -> None:
        summary = await GetStatsQueryHandler(ledger_repository).handle(GetStatsQuery(student))

        assert summary.stats.meals_tracked == 0
        assert summary.weekly_goal_progress == 0.0
        assert summary.category_breakdown == {}

    @pytest.mark.asyncio
    async def test_progress_and_breakdown(self, ledger_repository, log_handler, student) -> None:
        await _log(log_handler, "student-1", SOUP, RICE)
        await _log(log_handler, "student-1", CHICKEN, SALAD)

        summary = await GetStatsQueryHandler(ledger_repository).handle(GetStatsQuery(student))

        assert summary.stats.meals_tracked == 2
        assert summary.stats.carbon_saved == pytest.approx(1.14)
        assert summary.weekly_goal_progress == pytest.approx(11.4)
        assert summary.category_breakdown == {
            FoodCategory.PROTEIN: 2,
            FoodCategory.GRAINS: 1,
            FoodCategory.VEGETABLES: 1,
        }


class TestGetActivityFeed:
    @pytest.mark.asyncio
    async def test_newest_first(self, ledger_repository, log_handler, student) -> None:
        await _log(log_handler, "student-1", SOUP)
        await _log(log_handler, "student-1", CHICKEN)

        feed = await GetActivityFeedQueryHandler(ledger_repository).handle(
            GetActivityFeedQuery(student)
        )

        assert [a.action for a in feed] == [
            "Logged eco-friendly meal",
            "Logged plant-based meal",
        ]


class TestGetMealHistory:
    @pytest.mark.asyncio
    async def test_pagination_newest_first(self, ledger_repository, log_handler, student) -> None:
        with freeze_time("2025-03-10 08:00:00") as frozen:
            for food in (SOUP, RICE, CHICKEN):
                await _log(log_handler, "student-1", food)
                frozen.tick(60)

        handler = GetMealHistoryQueryHandler(ledger_repository)
        first_page = await handler.handle(GetMealHistoryQuery(student, limit=2))
        second_page = await handler.handle(GetMealHistoryQuery(student, limit=2, offset=2))

        assert [m.foods[0].name for m in first_page] == ["Grilled Chicken", "Brown Rice"]
        assert [m.foods[0].name for m in second_page] == ["Lentil Soup"]

    @pytest.mark.asyncio
    async def test_invalid_limit_and_offset(self, ledger_repository, student) -> None:
        handler = GetMealHistoryQueryHandler(ledger_repository)

        with pytest.raises(InvalidLimitError):
            await handler.handle(GetMealHistoryQuery(student, limit=0))
        with pytest.raises(InvalidLimitError):
            await handler.handle(GetMealHistoryQuery(student, offset=-1))


class TestGetLeaderboard:
    @pytest.mark.asyncio
    async def test_ranking_with_ties(self, ledger_repository, log_handler) -> None:
        """a and c saved 0.6 kg each, b saved 0.54 kg."""
        await _log(log_handler, "a", SOUP, RICE)
        await _log(log_handler, "b", CHICKEN, SALAD)
        await _log(log_handler, "c", SOUP, RICE)
        handler = GetLeaderboardQueryHandler(ledger_repository)

        board = await handler.handle(GetLeaderboardQuery(AccountContext(account_id="b")))

        assert [(e.rank, e.account_id) for e in board.entries] == [(1, "a"), (1, "c"), (3, "b")]
        assert board.account_rank == 3
        assert board.account_id == "b"
        assert board.total_accounts == 3

    @pytest.mark.asyncio
    async def test_caller_without_meals(self, ledger_repository, log_handler) -> None:
        await _log(log_handler, "a", SOUP)
        handler = GetLeaderboardQueryHandler(ledger_repository)

        board = await handler.handle(GetLeaderboardQuery(AccountContext(account_id="new")))

        assert [e.account_id for e in board.entries] == ["a"]
        assert board.account_rank == 2

    @pytest.mark.asyncio
    async def test_invalid_limit(self, ledger_repository, student) -> None:
        with pytest.raises(InvalidLimitError):
            await GetLeaderboardQueryHandler(ledger_repository).handle(
                GetLeaderboardQuery(student, limit=0)
            )
