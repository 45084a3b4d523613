"""Menu repository port (interface)."""

from typing import List, Optional, Protocol

from ecotaste.domain.menu.menu_item import MenuItem


class IMenuRepository(Protocol):
    """
    Interface for the cafeteria menu catalog.

    A catalog that was never written returns the default menu. A catalog
    cleared by staff stays empty.
    """

    async def list_items(self) -> List[MenuItem]:
        """Current menu in insertion order."""
        ...

    async def get_by_id(self, item_id: str) -> Optional[MenuItem]:
        ...

    async def add(self, item: MenuItem) -> None:
        ...

    async def remove(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not on the menu."""
        ...

    async def clear(self) -> None:
        ...
