"""Domain ports (interfaces for infrastructure adapters)."""

from ecotaste.domain.shared.ports.auth_provider import IAuthProvider
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository

__all__ = [
    "IAuthProvider",
    "IEventBus",
    "ILedgerRepository",
    "IMenuRepository",
]
