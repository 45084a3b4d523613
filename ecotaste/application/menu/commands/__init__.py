"""CQRS Commands for the menu catalog."""

from .add_menu_item import AddMenuItemCommand, AddMenuItemCommandHandler
from .clear_menu import ClearMenuCommand, ClearMenuCommandHandler
from .remove_menu_item import RemoveMenuItemCommand, RemoveMenuItemCommandHandler

__all__ = [
    "AddMenuItemCommand",
    "AddMenuItemCommandHandler",
    "RemoveMenuItemCommand",
    "RemoveMenuItemCommandHandler",
    "ClearMenuCommand",
    "ClearMenuCommandHandler",
]
