"""In-memory repositories (development and tests)."""

from .ledger_repository import InMemoryLedgerRepository
from .menu_repository import InMemoryMenuRepository

__all__ = ["InMemoryLedgerRepository", "InMemoryMenuRepository"]
