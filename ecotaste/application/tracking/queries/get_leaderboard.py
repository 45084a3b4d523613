"""Get leaderboard query."""

from dataclasses import dataclass
from typing import List

from ecotaste.domain.insights.leaderboard import LeaderboardEntry, rank_accounts, rank_for
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import InvalidLimitError
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository


@dataclass(frozen=True)
class GetLeaderboardQuery:
    account: AccountContext
    limit: int = 10


@dataclass(frozen=True)
class Leaderboard:
    """Top entries plus the caller's own rank.

    ``account_id`` is the caller, so the API layer can mark their entry
    without publishing other accounts' identities.
    """

    account_id: str
    entries: List[LeaderboardEntry]
    account_rank: int
    total_accounts: int


class GetLeaderboardQueryHandler:
    """Handler for GetLeaderboardQuery."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetLeaderboardQuery) -> Leaderboard:
        if query.limit < 1:
            raise InvalidLimitError(f"Limit must be at least 1, got {query.limit}")

        accounts = await self._repository.list_all_stats()
        own_stats = await self._repository.get_stats(query.account.account_id)

        return Leaderboard(
            account_id=query.account.account_id,
            entries=rank_accounts(accounts, limit=query.limit),
            account_rank=rank_for(own_stats.carbon_saved, [s for _, s in accounts]),
            total_accounts=len(accounts),
        )
