"""GraphQL context for dependency injection.

Provides the dependencies resolvers need to build handlers per request:
- Repositories (ledger, menu)
- Event bus
- Food detection provider and the in-flight scan registry
- Account context resolution (token claims or request input)
"""

from datetime import timezone, tzinfo
from typing import Any, Dict, Optional

from fastapi import Request
from strawberry.fastapi import BaseContext

from ecotaste.application.tracking.commands.scan_meal import InFlightScans
from ecotaste.application.tracking.orchestrators.meal_logging_orchestrator import (
    MealLoggingOrchestrator,
)
from ecotaste.domain.detection.ports.food_detection_provider import IFoodDetectionProvider
from ecotaste.domain.shared.account import AccountContext, Role
from ecotaste.domain.shared.errors import PermissionDeniedError, ValidationError
from ecotaste.domain.shared.ports.event_bus import IEventBus
from ecotaste.domain.shared.ports.ledger_repository import ILedgerRepository
from ecotaste.domain.shared.ports.menu_repository import IMenuRepository
from ecotaste.infrastructure.auth.jwt_provider import account_from_claims


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    Resolvers access dependencies with ``info.context.get("name")`` and the
    caller identity with ``info.context.account(account_id, role)``.

    Attributes:
        ledger_repository: Stats, meals, activities, popularity, waste
        menu_repository: Cafeteria menu catalog
        event_bus: Event bus for domain events
        detection_provider: Food detection provider (OpenAI or stub)
        in_flight_scans: Process-wide registry of running photo scans
        tz: Timezone in which streak days are counted
        auth_required: When True the identity must come from a verified token
        request: FastAPI request (auth claims set by AuthMiddleware)
        auth_claims: Verified JWT claims, None if no token was sent
    """

    def __init__(
        self,
        ledger_repository: ILedgerRepository,
        menu_repository: IMenuRepository,
        event_bus: IEventBus,
        detection_provider: IFoodDetectionProvider,
        in_flight_scans: InFlightScans,
        tz: tzinfo = timezone.utc,
        auth_required: bool = False,
        role_claim: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> None:
        super().__init__()
        self.ledger_repository = ledger_repository
        self.menu_repository = menu_repository
        self.event_bus = event_bus
        self.detection_provider = detection_provider
        self.in_flight_scans = in_flight_scans
        self.tz = tz
        self.auth_required = auth_required
        self.role_claim = role_claim
        self.request = request
        self.auth_claims: Optional[Dict[str, Any]] = (
            getattr(request.state, "auth_claims", None) if request else None
        )

    def get(self, key: str) -> Any:
        """Get dependency by name, None if not found."""
        return getattr(self, key, None)

    def account(
        self, account_id: Optional[str] = None, role: Optional[Role] = None
    ) -> AccountContext:
        """Resolve the caller identity.

        Verified token claims always win. Without a token, the account id
        and role from the request input are used, unless authentication is
        required.

        Raises:
            PermissionDeniedError: Authentication required but no token
            ValidationError: No token and no account id in the input
        """
        if self.auth_claims:
            return account_from_claims(self.auth_claims, self.role_claim)
        if self.auth_required:
            raise PermissionDeniedError("Authentication required")
        if not account_id or not account_id.strip():
            raise ValidationError("accountId is required when no token is sent")
        return AccountContext(account_id=account_id.strip(), role=role or Role.STUDENT)

    def orchestrator(self) -> MealLoggingOrchestrator:
        return MealLoggingOrchestrator(self.ledger_repository, self.event_bus, self.tz)


def create_context(
    ledger_repository: ILedgerRepository,
    menu_repository: IMenuRepository,
    event_bus: IEventBus,
    detection_provider: IFoodDetectionProvider,
    in_flight_scans: InFlightScans,
    tz: tzinfo = timezone.utc,
    auth_required: bool = False,
    role_claim: Optional[str] = None,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create the GraphQL context.

    Example:
        >>> context = create_context(
        ...     ledger_repository=InMemoryLedgerRepository(),
        ...     menu_repository=InMemoryMenuRepository(),
        ...     event_bus=InMemoryEventBus(),
        ...     detection_provider=StubFoodDetectionProvider(),
        ...     in_flight_scans=InFlightScans(),
        ... )
    """
    return GraphQLContext(
        ledger_repository=ledger_repository,
        menu_repository=menu_repository,
        event_bus=event_bus,
        detection_provider=detection_provider,
        in_flight_scans=in_flight_scans,
        tz=tz,
        auth_required=auth_required,
        role_claim=role_claim,
        request=request,
    )
