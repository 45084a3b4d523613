"""Get most wasted items query."""

from dataclasses import dataclass
from typing import List

from ecotaste.domain.insights.aggregator import DEFAULT_MOST_WASTED, most_wasted_items
from ecotaste.domain.insights.entities import WasteSummary
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository


@dataclass(frozen=True)
class GetMostWastedItemsQuery:
    account: AccountContext
    limit: int = DEFAULT_MOST_WASTED


class GetMostWastedItemsQueryHandler:
    """Handler for GetMostWastedItemsQuery."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetMostWastedItemsQuery) -> List[WasteSummary]:
        records = await self._repository.list_waste(query.account.account_id)
        return most_wasted_items(records, query.limit)
