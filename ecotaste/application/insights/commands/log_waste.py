"""Log waste command and handler."""

from dataclasses import dataclass
from typing import Optional
import logging

from ecotaste.domain.insights.aggregator import log_waste
from ecotaste.domain.insights.entities import WasteQuantity, WasteRecord
from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import MenuItemNotFoundError
from ecotaste.domain.shared.events import WasteLogged
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogWasteCommand:
    """
    Command: Report how much of a served item was wasted.

    Attributes:
        account: Caller identity
        item_id: Menu item id
        quantity: "low", "medium" or "high"
        item_name: Name to record when the item is no longer on the menu
        notes: Optional free text
    """

    account: AccountContext
    item_id: str
    quantity: str
    item_name: Optional[str] = None
    notes: Optional[str] = None


class LogWasteCommandHandler:
    """Handler for LogWasteCommand."""

    def __init__(
        self,
        ledger_repository: ILedgerRepository,
        menu_repository: IMenuRepository,
        event_bus: IEventBus,
    ):
        self._ledger_repository = ledger_repository
        self._menu_repository = menu_repository
        self._event_bus = event_bus

    async def handle(self, command: LogWasteCommand) -> WasteRecord:
        """
        Append a waste report.

        The item name comes from the current menu; ``item_name`` is only
        used for items that have since been removed.

        Raises:
            ValidationError: Unknown quantity
            MenuItemNotFoundError: Item not on the menu and no name given
        """
        quantity = WasteQuantity.parse(command.quantity)

        item = await self._menu_repository.get_by_id(command.item_id)
        if item is not None:
            item_name = item.name
        elif command.item_name and command.item_name.strip():
            item_name = command.item_name
        else:
            raise MenuItemNotFoundError(f"Menu item {command.item_id} not found")

        record = log_waste(command.item_id, item_name, quantity, notes=command.notes)
        account_id = command.account.account_id
        await self._ledger_repository.append_waste(account_id, record)

        logger.info(
            "Waste logged",
            extra={
                "account_id": account_id,
                "waste_id": record.id,
                "item_id": record.item_id,
                "quantity": record.quantity.value,
            },
        )

        await self._event_bus.publish(
            WasteLogged.create(
                account_id=account_id,
                waste_id=record.id,
                item_name=record.item_name,
                quantity=record.quantity.value,
            )
        )
        return record
