"""CQRS Commands for meal tracking."""

from .log_meal import FoodInput, LogMealCommand, LogMealCommandHandler
from .scan_meal import InFlightScans, ScanMealCommand, ScanMealCommandHandler, ScanResult
from .select_menu_item import SelectMenuItemCommand, SelectMenuItemCommandHandler

__all__ = [
    "FoodInput",
    "LogMealCommand",
    "LogMealCommandHandler",
    "SelectMenuItemCommand",
    "SelectMenuItemCommandHandler",
    # Photo scan
    "InFlightScans",
    "ScanMealCommand",
    "ScanMealCommandHandler",
    "ScanResult",
]
