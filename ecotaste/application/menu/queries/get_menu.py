"""Get menu query."""

from dataclasses import dataclass
from typing import List

from ecotaste.domain.menu.menu_item import MenuItem
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository


@dataclass(frozen=True)
class GetMenuQuery:
    pass


class GetMenuQueryHandler:
    """Handler for GetMenuQuery. Readable by every role."""

    def __init__(self, repository: IMenuRepository):
        self._repository = repository

    async def handle(self, query: GetMenuQuery) -> List[MenuItem]:
        return await self._repository.list_items()
