"""In-memory menu repository implementation."""

from typing import List, Optional

from ecotaste.domain.menu.catalog import default_menu
from ecotaste.domain.menu.menu_item import MenuItem


class InMemoryMenuRepository:
    """
    In-memory implementation of IMenuRepository port.

    The catalog is seeded with the default menu on first access. Once
    written (including cleared), the seed is never applied again.
    """

    def __init__(self, items: Optional[List[MenuItem]] = None) -> None:
        # None means "never initialized"
        self._items: Optional[List[MenuItem]] = list(items) if items is not None else None

    def _catalog(self) -> List[MenuItem]:
        if self._items is None:
            self._items = default_menu()
        return self._items

    async def list_items(self) -> List[MenuItem]:
        return list(self._catalog())

    async def get_by_id(self, item_id: str) -> Optional[MenuItem]:
        return next((item for item in self._catalog() if item.id == item_id), None)

    async def add(self, item: MenuItem) -> None:
        self._catalog().append(item)

    async def remove(self, item_id: str) -> bool:
        catalog = self._catalog()
        remaining = [item for item in catalog if item.id != item_id]
        if len(remaining) == len(catalog):
            return False
        self._items = remaining
        return True

    async def clear(self) -> None:
        self._items = []
