"""Menu query resolvers.

- menu: Today's cafeteria menu (every role)
- commonFoods: Quick-add reference list
"""

from typing import Any, List
import strawberry
from strawberry.types import Info

from ecotaste.application.menu.queries import GetMenuQuery, GetMenuQueryHandler
from ecotaste.domain.menu.catalog import COMMON_FOODS
from ecotaste.graphql_api.types_menu import CommonFood, MenuItem, map_common_food, map_menu_item


@strawberry.type
class MenuQueries:
    """Menu catalog queries."""

    @strawberry.field(description="Today's cafeteria menu")  # type: ignore[misc]
    async def menu(self, info: Info[Any, Any]) -> List[MenuItem]:
        """List menu items, oldest first.

        A catalog that was never saved returns the default menu; a cleared
        catalog stays empty.

        Example:
            query {
              menu { id, name, category, carbonFootprint, isPlantBased }
            }
        """
        handler = GetMenuQueryHandler(repository=info.context.get("menu_repository"))
        items = await handler.handle(GetMenuQuery())
        return [map_menu_item(item) for item in items]

    @strawberry.field(description="Common foods with typical carbon footprints")  # type: ignore[misc]
    def common_foods(self) -> List[CommonFood]:
        return [map_common_food(food) for food in COMMON_FOODS]
