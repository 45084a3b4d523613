"""Meal tracking query resolvers.

- stats: Stats summary of an account
- activities: Activity feed (newest first, at most 50)
- meals: Paginated meal history
- leaderboard: Accounts ranked by carbon saved
"""

from typing import Any, List, Optional
import strawberry
from strawberry.types import Info

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
from ecotaste.graphql_api.types_tracking import (
    Activity,
    Leaderboard,
    Meal,
    StatsSummaryType,
    map_activity,
    map_leaderboard,
    map_meal,
    map_stats_summary,
)


@strawberry.type
class TrackingQueries:
    """Meal tracking queries.

    ``accountId`` is ignored when the request carries a verified token.
    """

    @strawberry.field(description="Stats, weekly goal progress and category breakdown")  # type: ignore[misc]
    async def stats(
        self, info: Info[Any, Any], account_id: Optional[str] = None
    ) -> StatsSummaryType:
        """Stats summary.

        Example:
            query {
              stats(accountId: "student-1") {
                stats { carbonSaved, mealsTracked, impactScore, currentStreak }
                weeklyGoalProgress
                categoryBreakdown { category, count }
              }
            }
        """
        context = info.context
        handler = GetStatsQueryHandler(repository=context.get("ledger_repository"))
        summary = await handler.handle(GetStatsQuery(account=context.account(account_id)))
        return map_stats_summary(summary)

    @strawberry.field(description="Activity feed, newest first")  # type: ignore[misc]
    async def activities(
        self, info: Info[Any, Any], account_id: Optional[str] = None
    ) -> List[Activity]:
        context = info.context
        handler = GetActivityFeedQueryHandler(repository=context.get("ledger_repository"))
        records = await handler.handle(GetActivityFeedQuery(account=context.account(account_id)))
        return [map_activity(r) for r in records]

    @strawberry.field(description="Meal history with pagination, newest first")  # type: ignore[misc]
    async def meals(
        self,
        info: Info[Any, Any],
        account_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Meal]:
        """Meal history.

        Example:
            query {
              meals(accountId: "student-1", limit: 10) {
                id, timestamp, source, totalCarbon, foods { name }
              }
            }
        """
        context = info.context
        handler = GetMealHistoryQueryHandler(repository=context.get("ledger_repository"))
        meals = await handler.handle(
            GetMealHistoryQuery(
                account=context.account(account_id), limit=limit, offset=offset
            )
        )
        return [map_meal(m) for m in meals]

    @strawberry.field(description="Accounts ranked by carbon saved")  # type: ignore[misc]
    async def leaderboard(
        self,
        info: Info[Any, Any],
        account_id: Optional[str] = None,
        limit: int = 10,
    ) -> Leaderboard:
        context = info.context
        handler = GetLeaderboardQueryHandler(repository=context.get("ledger_repository"))
        board = await handler.handle(
            GetLeaderboardQuery(account=context.account(account_id), limit=limit)
        )
        return map_leaderboard(board)
