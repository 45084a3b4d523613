"""Get recommendations query.

Combines the current menu with the popularity and waste rankings of the
account into prioritized suggestions.
"""

from dataclasses import dataclass
from typing import List
import logging

from ecotaste.domain.insights.aggregator import most_wasted_items, top_items
from ecotaste.domain.insights.recommendation_engine import Recommendation, recommendations
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)

RANKING_DEPTH = 3


@dataclass(frozen=True)
class GetRecommendationsQuery:
    account: AccountContext


class GetRecommendationsQueryHandler:
    """Handler for GetRecommendationsQuery."""

    def __init__(self, ledger_repository: ILedgerRepository, menu_repository: IMenuRepository):
        self._ledger_repository = ledger_repository
        self._menu_repository = menu_repository

    async def handle(self, query: GetRecommendationsQuery) -> List[Recommendation]:
        account_id = query.account.account_id
        menu = await self._menu_repository.list_items()
        popularity = await self._ledger_repository.list_popularity(account_id)
        waste = await self._ledger_repository.list_waste(account_id)

        result = recommendations(
            menu,
            top_items(popularity, RANKING_DEPTH),
            most_wasted_items(waste, RANKING_DEPTH),
        )

        logger.debug(
            "Recommendations computed",
            extra={
                "account_id": account_id,
                "menu_size": len(menu),
                "recommendation_count": len(result),
            },
        )
        return result
