"""Account context passed explicitly to every operation.

There is no ambient session: handlers receive the account identity with
each command or query. Credentials never reach this service; the identity
provider authenticates users and the API layer builds the context from the
verified token claims.
"""

from dataclasses import dataclass
from enum import Enum

from ecotaste.domain.shared.errors import PermissionDeniedError


class Role(str, Enum):
    """Account role."""

    STUDENT = "student"
    CAFETERIA = "cafeteria"


@dataclass(frozen=True)
class AccountContext:
    """Identity of the caller.

    Attributes:
        account_id: Stable identifier from the identity provider (JWT ``sub``)
        role: Student or cafeteria staff

    Examples:
        >>> ctx = AccountContext(account_id="auth0|123", role=Role.CAFETERIA)
        >>> ctx.require_cafeteria()
    """

    account_id: str
    role: Role = Role.STUDENT

    def __post_init__(self) -> None:
        if not self.account_id or not self.account_id.strip():
            raise ValueError("account_id cannot be empty")

    @property
    def is_cafeteria(self) -> bool:
        return self.role is Role.CAFETERIA

    def require_cafeteria(self) -> None:
        """Raise PermissionDeniedError unless the caller is cafeteria staff."""
        if not self.is_cafeteria:
            raise PermissionDeniedError(
                f"Account {self.account_id} is not allowed to manage the menu"
            )
