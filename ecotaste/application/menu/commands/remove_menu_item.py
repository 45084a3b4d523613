"""Remove menu item command and handler (cafeteria staff only)."""

from dataclasses import dataclass

from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import MenuItemNotFoundError
from ecotaste.domain.shared.events import MenuChanged
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository


@dataclass(frozen=True)
class RemoveMenuItemCommand:
    account: AccountContext
    item_id: str


class RemoveMenuItemCommandHandler:
    """Handler for RemoveMenuItemCommand.

    Meals already logged keep their snapshot of the item.
    """

    def __init__(self, repository: IMenuRepository, event_bus: IEventBus):
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: RemoveMenuItemCommand) -> bool:
        command.account.require_cafeteria()

        if not await self._repository.remove(command.item_id):
            raise MenuItemNotFoundError(f"Menu item {command.item_id} not found")

        await self._event_bus.publish(
            MenuChanged.create(
                account_id=command.account.account_id,
                change="removed",
                item_id=command.item_id,
                menu_size=len(await self._repository.list_items()),
            )
        )
        return True
