"""Get top items query - most selected menu items."""

from dataclasses import dataclass
from typing import List

from ecotaste.domain.insights.aggregator import DEFAULT_TOP_ITEMS, top_items
from ecotaste.domain.insights.entities import PopularityRecord
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository


@dataclass(frozen=True)
class GetTopItemsQuery:
    account: AccountContext
    limit: int = DEFAULT_TOP_ITEMS


class GetTopItemsQueryHandler:
    """Handler for GetTopItemsQuery."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetTopItemsQuery) -> List[PopularityRecord]:
        records = await self._repository.list_popularity(query.account.account_id)
        return top_items(records, query.limit)
