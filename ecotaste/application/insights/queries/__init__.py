"""CQRS Queries for insights."""

from .get_most_wasted_items import GetMostWastedItemsQuery, GetMostWastedItemsQueryHandler
from .get_recommendations import GetRecommendationsQuery, GetRecommendationsQueryHandler
from .get_top_items import GetTopItemsQuery, GetTopItemsQueryHandler

__all__ = [
    "GetTopItemsQuery",
    "GetTopItemsQueryHandler",
    "GetMostWastedItemsQuery",
    "GetMostWastedItemsQueryHandler",
    "GetRecommendationsQuery",
    "GetRecommendationsQueryHandler",
]
