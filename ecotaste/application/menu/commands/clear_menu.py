"""Clear menu command and handler (cafeteria staff only)."""

from dataclasses import dataclass

from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.events import MenuChanged
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository


@dataclass(frozen=True)
class ClearMenuCommand:
    account: AccountContext


class ClearMenuCommandHandler:
    """Handler for ClearMenuCommand. A cleared menu is not re-seeded."""

    def __init__(self, repository: IMenuRepository, event_bus: IEventBus):
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: ClearMenuCommand) -> None:
        command.account.require_cafeteria()
        await self._repository.clear()
        await self._event_bus.publish(
            MenuChanged.create(
                account_id=command.account.account_id,
                change="cleared",
                item_id=None,
                menu_size=0,
            )
        )
