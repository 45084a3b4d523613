"""Unit test fixtures.

Unit tests do not depend on ecotaste.app or external services.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from ecotaste.application.tracking.orchestrators.meal_logging_orchestrator import (
    MealLoggingOrchestrator,
)
from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.shared.account import AccountContext, Role
from ecotaste.domain.tracking.entities import FoodSnapshot
from ecotaste.infrastructure.persistence.in_memory.ledger_repository import (
    InMemoryLedgerRepository,
)
from ecotaste.infrastructure.persistence.in_memory.menu_repository import InMemoryMenuRepository


@pytest.fixture
def student() -> AccountContext:
    return AccountContext(account_id="student-1", role=Role.STUDENT)


@pytest.fixture
def staff() -> AccountContext:
    return AccountContext(account_id="staff-1", role=Role.CAFETERIA)


@pytest.fixture
def ledger_repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def menu_repository() -> InMemoryMenuRepository:
    return InMemoryMenuRepository()


@pytest.fixture
def mock_event_bus() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def orchestrator(ledger_repository, mock_event_bus) -> MealLoggingOrchestrator:
    return MealLoggingOrchestrator(repository=ledger_repository, event_bus=mock_event_bus)


@pytest.fixture
def plant_based_foods() -> list:
    """Lentil Soup + Brown Rice: 1.2 kg CO2, plant-based."""
    return [
        FoodSnapshot("Lentil Soup", FoodCategory.PROTEIN, 0.4, True),
        FoodSnapshot("Brown Rice", FoodCategory.GRAINS, 0.8, True),
    ]


@pytest.fixture
def mixed_foods() -> list:
    """Grilled Chicken + Garden Salad: 2.7 kg CO2, not plant-based."""
    return [
        FoodSnapshot("Grilled Chicken", FoodCategory.PROTEIN, 2.5, False),
        FoodSnapshot("Garden Salad", FoodCategory.VEGETABLES, 0.2, True),
    ]


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
