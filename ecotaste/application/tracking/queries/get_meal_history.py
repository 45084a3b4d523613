"""Get meal history query - paginated meals of an account."""

from dataclasses import dataclass
from typing import List
import logging

from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import InvalidLimitError
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.tracking.entities import MealRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetMealHistoryQuery:
    """
    Query: Meals logged by an account, newest first.

    Attributes:
        account: Caller identity
        limit: Max number of results (default: 20)
        offset: Pagination offset (default: 0)
    """

    account: AccountContext
    limit: int = 20
    offset: int = 0


class GetMealHistoryQueryHandler:
    """Handler for GetMealHistoryQuery."""

    def __init__(self, repository: ILedgerRepository):
        self._repository = repository

    async def handle(self, query: GetMealHistoryQuery) -> List[MealRecord]:
        if query.limit < 1:
            raise InvalidLimitError(f"Limit must be at least 1, got {query.limit}")
        if query.offset < 0:
            raise InvalidLimitError(f"Offset cannot be negative, got {query.offset}")

        meals = await self._repository.list_meals(
            query.account.account_id, limit=query.limit, offset=query.offset
        )

        logger.info(
            "Meal history retrieved",
            extra={
                "account_id": query.account.account_id,
                "result_count": len(meals),
                "limit": query.limit,
                "offset": query.offset,
            },
        )
        return meals
