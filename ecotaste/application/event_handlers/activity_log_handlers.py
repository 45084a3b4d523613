"""Handlers logging domain events.

Side effects only: none of these handlers modify system state.
"""

import logging

from ecotaste.domain.shared.events import MealLogged, MenuChanged, MenuItemSelected, WasteLogged
from ecotaste.domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)


class MealLoggedHandler:
    """Handler for MealLogged domain events."""

    async def handle(self, event: MealLogged) -> None:
        logger.info(
            "meal_logged",
            extra={
                "event_type": "MealLogged",
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "account_id": event.account_id,
                "meal_id": str(event.meal_id),
                "source": event.source,
                "total_carbon": round(event.total_carbon, 3),
                "carbon_saved": round(event.carbon_saved, 3),
                "is_plant_based": event.is_plant_based,
                "current_streak": event.current_streak,
            },
        )


class MenuItemSelectedHandler:
    """Handler for MenuItemSelected domain events."""

    async def handle(self, event: MenuItemSelected) -> None:
        logger.info(
            "menu_item_selected",
            extra={
                "event_type": "MenuItemSelected",
                "event_id": str(event.event_id),
                "account_id": event.account_id,
                "item_id": event.item_id,
                "selections": event.selections,
            },
        )


class WasteLoggedHandler:
    """Handler for WasteLogged domain events."""

    async def handle(self, event: WasteLogged) -> None:
        logger.info(
            "waste_logged",
            extra={
                "event_type": "WasteLogged",
                "event_id": str(event.event_id),
                "account_id": event.account_id,
                "waste_id": event.waste_id,
                "item_name": event.item_name,
                "quantity": event.quantity,
            },
        )


class MenuChangedHandler:
    """Handler for MenuChanged domain events."""

    async def handle(self, event: MenuChanged) -> None:
        logger.info(
            "menu_changed",
            extra={
                "event_type": "MenuChanged",
                "event_id": str(event.event_id),
                "account_id": event.account_id,
                "change": event.change,
                "item_id": event.item_id,
                "menu_size": event.menu_size,
            },
        )


def register_event_handlers(event_bus: IEventBus) -> None:
    """Subscribe the logging handlers to their events."""
    event_bus.subscribe(MealLogged, MealLoggedHandler().handle)
    event_bus.subscribe(MenuItemSelected, MenuItemSelectedHandler().handle)
    event_bus.subscribe(WasteLogged, WasteLoggedHandler().handle)
    event_bus.subscribe(MenuChanged, MenuChangedHandler().handle)
