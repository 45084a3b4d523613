"""Mutation resolvers for the menu catalog (cafeteria staff only).

- addMenuItem: Add a dish to today's menu
- removeMenuItem: Remove a dish
- clearMenu: Empty the menu
"""

import strawberry

from ecotaste.application.menu.commands import (
    AddMenuItemCommand,
    AddMenuItemCommandHandler,
    ClearMenuCommand,
    ClearMenuCommandHandler,
    RemoveMenuItemCommand,
    RemoveMenuItemCommandHandler,
)
from ecotaste.graphql_api.errors import to_error
from ecotaste.graphql_api.types_menu import (
    AddMenuItemInput,
    AddMenuItemResult,
    ClearMenuError,
    ClearMenuInput,
    ClearMenuResult,
    ClearMenuSuccess,
    MenuItemError,
    MenuItemSuccess,
    RemoveMenuItemError,
    RemoveMenuItemInput,
    RemoveMenuItemResult,
    RemoveMenuItemSuccess,
    map_menu_item,
    to_domain_role,
)


@strawberry.type
class MenuMutations:
    """Mutations for the cafeteria menu."""

    @strawberry.mutation
    async def add_menu_item(
        self, info: strawberry.types.Info, input: AddMenuItemInput
    ) -> AddMenuItemResult:
        """Add a menu item.

        Example:
            mutation {
              addMenuItem(input: {
                name: "Chickpea Curry"
                category: "protein"
                carbonFootprint: 0.7
                isPlantBased: true
              }) {
                ... on MenuItemSuccess { item { id, name } }
                ... on MenuItemError { message, code }
              }
            }
        """
        context = info.context
        try:
            command = AddMenuItemCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                name=input.name,
                category=input.category,
                carbon_footprint=input.carbon_footprint,
                is_plant_based=input.is_plant_based,
            )
            handler = AddMenuItemCommandHandler(
                repository=context.get("menu_repository"),
                event_bus=context.get("event_bus"),
            )
            item = await handler.handle(command)
            return MenuItemSuccess(item=map_menu_item(item))
        except Exception as e:
            return to_error(e, MenuItemError, mutation="addMenuItem")

    @strawberry.mutation
    async def remove_menu_item(
        self, info: strawberry.types.Info, input: RemoveMenuItemInput
    ) -> RemoveMenuItemResult:
        """Remove a menu item. Meals already logged keep their snapshot."""
        context = info.context
        try:
            command = RemoveMenuItemCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                item_id=input.item_id,
            )
            handler = RemoveMenuItemCommandHandler(
                repository=context.get("menu_repository"),
                event_bus=context.get("event_bus"),
            )
            await handler.handle(command)
            return RemoveMenuItemSuccess(item_id=input.item_id)
        except Exception as e:
            return to_error(e, RemoveMenuItemError, mutation="removeMenuItem")

    @strawberry.mutation
    async def clear_menu(
        self, info: strawberry.types.Info, input: ClearMenuInput
    ) -> ClearMenuResult:
        """Remove every item. A cleared menu is not re-seeded."""
        context = info.context
        try:
            command = ClearMenuCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
            )
            handler = ClearMenuCommandHandler(
                repository=context.get("menu_repository"),
                event_bus=context.get("event_bus"),
            )
            await handler.handle(command)
            return ClearMenuSuccess()
        except Exception as e:
            return to_error(e, ClearMenuError, mutation="clearMenu")
