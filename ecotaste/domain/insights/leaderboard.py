"""Leaderboard ranking by carbon saved."""

from dataclasses import dataclass
import hashlib
from typing import List, Optional, Sequence, Tuple

from ecotaste.domain.tracking.entities import UserStats

WEEKLY_GOAL_KG = 10.0
PLAYER_HANDLE_LENGTH = 12


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    account_id: str
    carbon_saved: float
    meals_tracked: int
    impact_score: int


def rank_accounts(
    accounts: Sequence[Tuple[str, UserStats]], limit: Optional[int] = None
) -> List[LeaderboardEntry]:
    """Rank accounts by carbon saved, highest first.

    Accounts with equal savings share a rank (1 + number of accounts with
    strictly more carbon saved) and keep registration order.
    """
    ordered = sorted(accounts, key=lambda pair: pair[1].carbon_saved, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]

    entries: List[LeaderboardEntry] = []
    for position, (account_id, stats) in enumerate(ordered, start=1):
        # Sorted descending: a tie keeps the rank of the first entry with that value
        if entries and entries[-1].carbon_saved == stats.carbon_saved:
            rank = entries[-1].rank
        else:
            rank = position
        entries.append(
            LeaderboardEntry(
                rank=rank,
                account_id=account_id,
                carbon_saved=stats.carbon_saved,
                meals_tracked=stats.meals_tracked,
                impact_score=stats.impact_score,
            )
        )
    return entries


def rank_for(carbon_saved: float, all_stats: Sequence[UserStats]) -> int:
    """Rank of an account: 1 + number of accounts that saved strictly more."""
    return 1 + sum(1 for stats in all_stats if stats.carbon_saved > carbon_saved)


def player_handle(account_id: str) -> str:
    """Stable public handle of an account, never the identity subject itself."""
    digest = hashlib.sha256(account_id.encode("utf-8")).hexdigest()
    return f"player-{digest[:PLAYER_HANDLE_LENGTH]}"


def weekly_goal_progress(carbon_saved: float) -> float:
    """Percentage of the weekly savings goal reached, capped at 100."""
    return min(100.0, carbon_saved / WEEKLY_GOAL_KG * 100)
