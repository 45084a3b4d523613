"""Repository factory for the persistence layer.

Environment-based repository selection:
- REPOSITORY_BACKEND=mongodb: MongoDB (requires MONGODB_URI)
- REPOSITORY_BACKEND=inmemory: in-memory (default, tests)
- LEDGER_CACHE_TTL_S > 0 wraps the ledger in the cache-aside tier

Usage:
    repo = get_ledger_repository()   # Singleton instance
    menu = get_menu_repository()
"""

from typing import Optional
import logging

from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository
from ecotaste.infrastructure.config import (
    get_ledger_cache_ttl,
    get_mongodb_uri,
    get_repository_backend,
)
from ecotaste.infrastructure.persistence.cache_aside import CacheAsideLedgerRepository
from ecotaste.infrastructure.persistence.in_memory.ledger_repository import (
    InMemoryLedgerRepository,
)
from ecotaste.infrastructure.persistence.in_memory.menu_repository import InMemoryMenuRepository

logger = logging.getLogger(__name__)


def _use_mongodb() -> bool:
    mode = get_repository_backend()
    if mode == "mongodb":
        if not get_mongodb_uri():
            raise ValueError(
                "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
            )
        return True
    if mode != "inmemory":
        raise ValueError(f"Unknown REPOSITORY_BACKEND: {mode}")
    return False


def create_ledger_repository() -> ILedgerRepository:
    """Create the ledger repository based on REPOSITORY_BACKEND and LEDGER_CACHE_TTL_S."""
    durable: ILedgerRepository
    if _use_mongodb():
        # Imported lazily: motor is only needed with the mongodb backend
        from ecotaste.infrastructure.persistence.mongodb.ledger_repository import (
            MongoLedgerRepository,
        )

        durable = MongoLedgerRepository()
    else:
        durable = InMemoryLedgerRepository()

    ttl = get_ledger_cache_ttl()
    logger.info(
        "Ledger repository created",
        extra={"durable": type(durable).__name__, "cache_ttl_s": ttl},
    )
    if ttl > 0:
        return CacheAsideLedgerRepository(durable, ttl_seconds=ttl)
    return durable


def create_menu_repository() -> IMenuRepository:
    """Create the menu repository based on REPOSITORY_BACKEND."""
    if _use_mongodb():
        from ecotaste.infrastructure.persistence.mongodb.menu_repository import (
            MongoMenuRepository,
        )

        return MongoMenuRepository()
    return InMemoryMenuRepository()


_ledger_repository: Optional[ILedgerRepository] = None
_menu_repository: Optional[IMenuRepository] = None


def get_ledger_repository() -> ILedgerRepository:
    """Get singleton ledger repository instance."""
    global _ledger_repository
    if _ledger_repository is None:
        _ledger_repository = create_ledger_repository()
    return _ledger_repository


def get_menu_repository() -> IMenuRepository:
    """Get singleton menu repository instance."""
    global _menu_repository
    if _menu_repository is None:
        _menu_repository = create_menu_repository()
    return _menu_repository


def reset_repositories() -> None:
    """Reset singleton instances (tests switch backends through env vars)."""
    global _ledger_repository, _menu_repository
    _ledger_repository = None
    _menu_repository = None
