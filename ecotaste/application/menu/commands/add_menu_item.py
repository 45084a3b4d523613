"""Add menu item command and handler (cafeteria staff only)."""

from dataclasses import dataclass
import logging

from ecotaste.domain.menu.food_category import FoodCategory
from ecotaste.domain.menu.menu_item import MenuItem
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.events import MenuChanged
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddMenuItemCommand:
    account: AccountContext
    name: str
    category: str
    carbon_footprint: float
    is_plant_based: bool


class AddMenuItemCommandHandler:
    """Handler for AddMenuItemCommand."""

    def __init__(self, repository: IMenuRepository, event_bus: IEventBus):
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: AddMenuItemCommand) -> MenuItem:
        """
        Raises:
            PermissionDeniedError: Caller is not cafeteria staff
            InvalidCategoryError: Unknown category
            InvalidFoodError: Blank name, negative carbon or dessert
        """
        command.account.require_cafeteria()
        item = MenuItem.create(
            name=command.name,
            category=FoodCategory.parse(command.category),
            carbon_footprint=command.carbon_footprint,
            is_plant_based=command.is_plant_based,
        )

        await self._repository.add(item)
        menu_size = len(await self._repository.list_items())

        logger.info(
            "Menu item added",
            extra={
                "account_id": command.account.account_id,
                "item_id": item.id,
                "item_name": item.name,
                "carbon_footprint": item.carbon_footprint,
            },
        )

        await self._event_bus.publish(
            MenuChanged.create(
                account_id=command.account.account_id,
                change="added",
                item_id=item.id,
                menu_size=menu_size,
            )
        )
        return item
