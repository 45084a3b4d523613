"""Unit tests for the insights queries: rankings and recommendations."""

import pytest

from ecotaste.application.insights.commands import LogWasteCommand, LogWasteCommandHandler
from ecotaste.application.insights.queries import (
    GetMostWastedItemsQuery,
    GetMostWastedItemsQueryHandler,
    GetRecommendationsQuery,
    GetRecommendationsQueryHandler,
    GetTopItemsQuery,
    GetTopItemsQueryHandler,
)
from ecotaste.application.tracking.commands import (
    SelectMenuItemCommand,
    SelectMenuItemCommandHandler,
)
from ecotaste.domain.insights.recommendation_engine import Priority, RecommendationType
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import InvalidLimitError


@pytest.fixture
def select_handler(
    menu_repository, ledger_repository, orchestrator, mock_event_bus
) -> SelectMenuItemCommandHandler:
    return SelectMenuItemCommandHandler(
        menu_repository=menu_repository,
        ledger_repository=ledger_repository,
        orchestrator=orchestrator,
        event_bus=mock_event_bus,
    )


@pytest.fixture
def waste_handler(ledger_repository, menu_repository, mock_event_bus) -> LogWasteCommandHandler:
    return LogWasteCommandHandler(
        ledger_repository=ledger_repository,
        menu_repository=menu_repository,
        event_bus=mock_event_bus,
    )


class TestRankings:
    @pytest.mark.asyncio
    async def test_top_items(self, select_handler, ledger_repository, student) -> None:
        for item_id in ("3", "6", "6", "1"):
            await select_handler.handle(SelectMenuItemCommand(account=student, item_id=item_id))

        top = await GetTopItemsQueryHandler(ledger_repository).handle(
            GetTopItemsQuery(student, limit=2)
        )

        assert [(r.item_name, r.selections) for r in top] == [
            ("Beef Burger", 2),
            ("Lentil Soup", 1),
        ]

    @pytest.mark.asyncio
    async def test_top_items_invalid_limit(self, ledger_repository, student) -> None:
        with pytest.raises(InvalidLimitError):
            await GetTopItemsQueryHandler(ledger_repository).handle(
                GetTopItemsQuery(student, limit=0)
            )

    @pytest.mark.asyncio
    async def test_most_wasted(self, waste_handler, ledger_repository, staff) -> None:
        for item_id, quantity in (("6", "high"), ("4", "medium"), ("6", "low")):
            await waste_handler.handle(
                LogWasteCommand(account=staff, item_id=item_id, quantity=quantity)
            )

        wasted = await GetMostWastedItemsQueryHandler(ledger_repository).handle(
            GetMostWastedItemsQuery(staff)
        )

        assert [(s.item_name, s.waste_score) for s in wasted] == [
            ("Beef Burger", 4),
            ("Brown Rice", 2),
        ]


class TestGetRecommendations:
    @pytest.mark.asyncio
    async def test_recommendations_from_account_activity(
        self, select_handler, waste_handler, ledger_repository, menu_repository, staff
    ) -> None:
        await select_handler.handle(SelectMenuItemCommand(account=staff, item_id="2"))
        for _ in range(2):
            await waste_handler.handle(
                LogWasteCommand(account=staff, item_id="6", quantity="high")
            )
        handler = GetRecommendationsQueryHandler(
            ledger_repository=ledger_repository, menu_repository=menu_repository
        )

        result = await handler.handle(GetRecommendationsQuery(staff))

        assert [(r.type, r.priority) for r in result] == [
            (RecommendationType.CARBON, Priority.HIGH),
            (RecommendationType.WASTE, Priority.HIGH),
            (RecommendationType.POPULAR, Priority.LOW),
        ]
        assert result[2].message.startswith('"Vegetable Stir Fry" is a student favorite with 1')

    @pytest.mark.asyncio
    async def test_rankings_are_scoped_per_account(
        self, select_handler, ledger_repository, menu_repository, student
    ) -> None:
        await select_handler.handle(SelectMenuItemCommand(account=student, item_id="2"))
        handler = GetRecommendationsQueryHandler(
            ledger_repository=ledger_repository, menu_repository=menu_repository
        )

        result = await handler.handle(GetRecommendationsQuery(AccountContext("someone-else")))

        assert [r.type for r in result] == [RecommendationType.CARBON]
