"""CQRS Queries for meal tracking."""

from .get_activity_feed import GetActivityFeedQuery, GetActivityFeedQueryHandler
from .get_leaderboard import GetLeaderboardQuery, GetLeaderboardQueryHandler, Leaderboard
from .get_meal_history import GetMealHistoryQuery, GetMealHistoryQueryHandler
from .get_stats import GetStatsQuery, GetStatsQueryHandler, StatsSummary

__all__ = [
    "GetStatsQuery",
    "GetStatsQueryHandler",
    "StatsSummary",
    "GetActivityFeedQuery",
    "GetActivityFeedQueryHandler",
    "GetMealHistoryQuery",
    "GetMealHistoryQueryHandler",
    "GetLeaderboardQuery",
    "GetLeaderboardQueryHandler",
    "Leaderboard",
]
