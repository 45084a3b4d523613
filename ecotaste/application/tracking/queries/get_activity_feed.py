"""Get activity feed query."""

from dataclasses import dataclass
from typing import List

from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.tracking.entities import ActivityRecord


@dataclass(frozen=True)
class GetActivityFeedQuery:
    account: AccountContext


class GetActivityFeedQueryHandler:
    """Handler for GetActivityFeedQuery. Newest first, at most 50 entries."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetActivityFeedQuery) -> List[ActivityRecord]:
        return await self._repository.list_activities(query.account.account_id)
