"""Mutation resolvers for insights.

- logWaste: Report how much of a served item was wasted
"""

import strawberry

from ecotaste.application.insights.commands import LogWasteCommand, LogWasteCommandHandler
from ecotaste.graphql_api.errors import to_error
from ecotaste.graphql_api.types_insights import (
    LogWasteError,
    LogWasteInput,
    LogWasteResult,
    LogWasteSuccess,
    map_waste_record,
)
from ecotaste.graphql_api.types_menu import to_domain_role


@strawberry.type
class InsightsMutations:
    """Mutations for popularity and waste tracking."""

    @strawberry.mutation
    async def log_waste(self, info: strawberry.types.Info, input: LogWasteInput) -> LogWasteResult:
        """Append a waste report.

        Example:
            mutation {
              logWaste(input: {accountId: "staff-1", itemId: "6", quantity: "high"}) {
                ... on LogWasteSuccess { waste { id, itemName, quantity } }
                ... on LogWasteError { message, code }
              }
            }
        """
        context = info.context
        try:
            command = LogWasteCommand(
                account=context.account(input.account_id, to_domain_role(input.role)),
                item_id=input.item_id,
                quantity=input.quantity,
                item_name=input.item_name,
                notes=input.notes,
            )
            handler = LogWasteCommandHandler(
                ledger_repository=context.get("ledger_repository"),
                menu_repository=context.get("menu_repository"),
                event_bus=context.get("event_bus"),
            )
            record = await handler.handle(command)
            return LogWasteSuccess(waste=map_waste_record(record))
        except Exception as e:
            return to_error(e, LogWasteError, mutation="logWaste")
