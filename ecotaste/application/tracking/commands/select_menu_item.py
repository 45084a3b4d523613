"""Select menu item command and handler."""

from dataclasses import dataclass
import logging

from ecotaste.domain.shared.account import AccountContext
from ecotaste.domain.shared.errors import MenuItemNotFoundError
from ecotaste.domain.shared.events import MenuItemSelected
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository
from ecotaste.domain.tracking.entities import MealSource
from ecotaste.domain.tracking.impact_calculator import MealLogResult
from ..orchestrators.meal_logging_orchestrator import MealLoggingOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectMenuItemCommand:
    """
    Command: Pick an item from today's menu.

    Logs a one-item meal with a snapshot of the item and counts the
    selection in the popularity ranking.
    """

    account: AccountContext
    item_id: str


class SelectMenuItemCommandHandler:
    """Handler for SelectMenuItemCommand."""

    def __init__(
        self,
        menu_repository: IMenuRepository,
        ledger_repository: ILedgerRepository,
        orchestrator: MealLoggingOrchestrator,
        event_bus: IEventBus,
    ):
        self._menu_repository = menu_repository
        self._ledger_repository = ledger_repository
        self._orchestrator = orchestrator
        self._event_bus = event_bus

    async def handle(self, command: SelectMenuItemCommand) -> MealLogResult:
        """
        Flow:
        1. Resolve the menu item (MenuItemNotFoundError if absent)
        2. Log the meal (stats conflict aborts before popularity changes)
        3. Count the selection with one atomic increment
        4. Publish MenuItemSelected

        The meal is the record of truth. Once it is committed, a failed
        count is logged and the logged meal is still returned, so the
        caller never retries a meal that was already saved.
        """
        account_id = command.account.account_id
        item = await self._menu_repository.get_by_id(command.item_id)
        if item is None:
            raise MenuItemNotFoundError(f"Menu item {command.item_id} not found")

        result = await self._orchestrator.log(
            account_id, [item.to_snapshot()], MealSource.MENU
        )

        try:
            record = await self._ledger_repository.increment_selection(
                account_id, item.id, item.name, now=result.meal.timestamp
            )
        except Exception:
            logger.exception(
                "Selection not counted",
                extra={
                    "account_id": account_id,
                    "item_id": item.id,
                    "meal_id": str(result.meal.id),
                },
            )
            return result

        logger.info(
            "Menu item selected",
            extra={
                "account_id": account_id,
                "item_id": item.id,
                "selections": record.selections,
            },
        )

        await self._event_bus.publish(
            MenuItemSelected.create(
                account_id=account_id,
                item_id=item.id,
                item_name=item.name,
                selections=record.selections,
            )
        )
        return result
