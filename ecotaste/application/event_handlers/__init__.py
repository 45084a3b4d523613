"""Domain event handlers."""

from .activity_log_handlers import (
    MealLoggedHandler,
    MenuChangedHandler,
    MenuItemSelectedHandler,
    WasteLoggedHandler,
    register_event_handlers,
)

__all__ = [
    "MealLoggedHandler",
    "MenuItemSelectedHandler",
    "WasteLoggedHandler",
    "MenuChangedHandler",
    "register_event_handlers",
]
