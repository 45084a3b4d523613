"""Insights query resolvers.

- topItems: Most selected menu items
- mostWastedItems: Items with the highest waste score
- recommendations: Prioritized menu suggestions
"""

from typing import Any, List, Optional
import strawberry
from strawberry.types import Info

from ecotaste.application.insights.queries import (
    GetMostWastedItemsQuery,
    GetMostWastedItemsQueryHandler,
    GetRecommendationsQuery,
    GetRecommendationsQueryHandler,
    GetTopItemsQuery,
    GetTopItemsQueryHandler,
)
from ecotaste.domain.insights.aggregator import DEFAULT_MOST_WASTED, DEFAULT_TOP_ITEMS
from ecotaste.graphql_api.types_insights import (
    PopularItem,
    Recommendation,
    WastedItem,
    map_popular_item,
    map_recommendation,
    map_wasted_item,
)


@strawberry.type
class InsightsQueries:
    """Popularity, waste and recommendation queries."""

    @strawberry.field(description="Most selected menu items")  # type: ignore[misc]
    async def top_items(
        self,
        info: Info[Any, Any],
        account_id: Optional[str] = None,
        limit: int = DEFAULT_TOP_ITEMS,
    ) -> List[PopularItem]:
        context = info.context
        handler = GetTopItemsQueryHandler(repository=context.get("ledger_repository"))
        records = await handler.handle(
            GetTopItemsQuery(account=context.account(account_id), limit=limit)
        )
        return [map_popular_item(r) for r in records]

    @strawberry.field(description="Most wasted items by waste score")  # type: ignore[misc]
    async def most_wasted_items(
        self,
        info: Info[Any, Any],
        account_id: Optional[str] = None,
        limit: int = DEFAULT_MOST_WASTED,
    ) -> List[WastedItem]:
        context = info.context
        handler = GetMostWastedItemsQueryHandler(repository=context.get("ledger_repository"))
        summaries = await handler.handle(
            GetMostWastedItemsQuery(account=context.account(account_id), limit=limit)
        )
        return [map_wasted_item(s) for s in summaries]

    @strawberry.field(description="Menu recommendations, highest priority first")  # type: ignore[misc]
    async def recommendations(
        self, info: Info[Any, Any], account_id: Optional[str] = None
    ) -> List[Recommendation]:
        """Recommendations.

        Example:
            query {
              recommendations(accountId: "staff-1") { type, message, priority }
            }
        """
        context = info.context
        handler = GetRecommendationsQueryHandler(
            ledger_repository=context.get("ledger_repository"),
            menu_repository=context.get("menu_repository"),
        )
        result = await handler.handle(
            GetRecommendationsQuery(account=context.account(account_id))
        )
        return [map_recommendation(r) for r in result]
