"""CQRS Queries for the menu catalog."""

from .get_menu import GetMenuQuery, GetMenuQueryHandler

__all__ = ["GetMenuQuery", "GetMenuQueryHandler"]
