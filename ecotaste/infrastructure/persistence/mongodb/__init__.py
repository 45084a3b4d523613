"""MongoDB repositories (motor)."""

from .ledger_repository import MongoLedgerRepository
from .menu_repository import MongoMenuRepository

__all__ = ["MongoLedgerRepository", "MongoMenuRepository"]
