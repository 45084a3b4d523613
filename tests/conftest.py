"""Integration test fixtures.

Loads the full app. Unit tests in tests/unit/ use their own fixtures and
never import the app module.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, AsyncIterator, cast

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

# The API tests run against in-memory storage and the stub detector, with
# authentication off, whatever the local .env says
os.environ["REPOSITORY_BACKEND"] = "inmemory"
os.environ["DETECTION_PROVIDER"] = "stub"
os.environ["AUTH_REQUIRED"] = "false"
os.environ.pop("AUTH_ISSUER_DOMAIN", None)


@pytest_asyncio.fixture
async def client(monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[AsyncClient]:
    """Async HTTP client for GraphQL/REST tests.

    Every test gets fresh repositories and scan registry, so tests do not
    share ledger or menu state.
    """
    import ecotaste.app as app_module
    from ecotaste.application.tracking.commands import InFlightScans
    from ecotaste.infrastructure.detection.stub_provider import StubFoodDetectionProvider
    from ecotaste.infrastructure.persistence.in_memory.ledger_repository import (
        InMemoryLedgerRepository,
    )
    from ecotaste.infrastructure.persistence.in_memory.menu_repository import (
        InMemoryMenuRepository,
    )

    monkeypatch.setattr(app_module, "_ledger_repository", InMemoryLedgerRepository())
    monkeypatch.setattr(app_module, "_menu_repository", InMemoryMenuRepository())
    monkeypatch.setattr(app_module, "_in_flight_scans", InFlightScans())
    monkeypatch.setattr(app_module, "_detection_provider", StubFoodDetectionProvider())

    transport = ASGITransport(app=cast(Any, app_module.app))
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
