"""Mutation resolvers for meal tracking.

These resolvers execute CQRS commands:
- logMeal: Log a meal (manual, or confirming a photo scan)
- selectMenuItem: Log a one-item meal from today's menu
- scanMeal: Detect foods in a photo (nothing persisted)
"""

import strawberry

from ecotaste.application.tracking.commands import (
    FoodInput as FoodInputCommand,
    LogMealCommand,
    LogMealCommandHandler,
    ScanMealCommand,
    ScanMealCommandHandler,
    SelectMenuItemCommand,
    SelectMenuItemCommandHandler,
)
from ecotaste.graphql_api.errors import to_error
from ecotaste.graphql_api.types_menu import to_domain_role
from ecotaste.graphql_api.types_tracking import (
    LogMealError,
    LogMealInput,
    LogMealResult,
    ScanMealError,
    ScanMealInput,
    ScanMealResult,
    SelectMenuItemError,
    SelectMenuItemInput,
    SelectMenuItemResult,
    map_log_result,
    map_scan_result,
    to_domain_source,
)


@strawberry.type
class TrackingMutations:
    """Mutations for meal tracking."""

    @strawberry.mutation
    async def log_meal(self, info: strawberry.types.Info, input: LogMealInput) -> LogMealResult:
        """Log a meal.

        Workflow:
        1. Validate foods (at least one, known category, carbon >= 0)
        2. Compute carbon saved, next stats and activity entry
        3. Commit with an optimistic check on the stats version
        4. Publish MealLogged

        Example:
            mutation {
              logMeal(input: {
                accountId: "student-1"
                foods: [{name: "Lentil Soup", category: "protein",
                         carbonFootprint: 0.4, isPlantBased: true}]
              }) {
                ... on LogMealSuccess { carbonSaved, stats { impactScore } }
                ... on LogMealError { message, code }
              }
            }
        """
        context = info.context
        try:
            command = LogMealCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                foods=tuple(
                    FoodInputCommand(
                        name=f.name,
                        category=f.category,
                        carbon_footprint=f.carbon_footprint,
                        is_plant_based=f.is_plant_based,
                    )
                    for f in input.foods
                ),
                source=to_domain_source(input.source),
            )
            handler = LogMealCommandHandler(orchestrator=context.orchestrator())
            result = await handler.handle(command)
            return map_log_result(result)
        except Exception as e:
            return to_error(e, LogMealError, mutation="logMeal")

    @strawberry.mutation
    async def select_menu_item(
        self, info: strawberry.types.Info, input: SelectMenuItemInput
    ) -> SelectMenuItemResult:
        """Pick an item from today's menu and log it as a meal."""
        context = info.context
        try:
            command = SelectMenuItemCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                item_id=input.item_id,
            )
            handler = SelectMenuItemCommandHandler(
                menu_repository=context.get("menu_repository"),
                ledger_repository=context.get("ledger_repository"),
                orchestrator=context.orchestrator(),
                event_bus=context.get("event_bus"),
            )
            result = await handler.handle(command)
            return map_log_result(result)
        except Exception as e:
            return to_error(e, SelectMenuItemError, mutation="selectMenuItem")

    @strawberry.mutation
    async def scan_meal(self, info: strawberry.types.Info, input: ScanMealInput) -> ScanMealResult:
        """Detect foods in a meal photo.

        Step 1 of the photo flow: the user reviews the detected foods and
        confirms them with logMeal(source: PHOTO). A second scan of the same
        account while one is running fails with SCAN_IN_PROGRESS.
        """
        context = info.context
        try:
            command = ScanMealCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                image=input.image,
            )
            handler = ScanMealCommandHandler(
                provider=context.get("detection_provider"),
                in_flight=context.get("in_flight_scans"),
            )
            result = await handler.handle(command)
            return map_scan_result(result)
        except Exception as e:
            return to_error(e, ScanMealError, mutation="scanMeal")
