"""Domain events.

Events are immutable records of facts that occurred. They are published on
the event bus after the corresponding state change has been persisted.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for domain events.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: When the event occurred (UTC timezone-aware).

    Raises:
        ValueError: If occurred_at is not timezone-aware.
    """

    event_id: UUID
    occurred_at: datetime

    def __post_init__(self) -> None:
        """Validate event invariants."""
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware (use UTC)")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MealLogged(DomainEvent):
    """A meal has been logged and the account stats advanced.

    Examples:
        >>> event = MealLogged.create(
        ...     account_id="student-1",
        ...     meal_id=uuid4(),
        ...     source="photo",
        ...     total_carbon=1.2,
        ...     carbon_saved=0.6,
        ...     is_plant_based=True,
        ...     current_streak=3,
        ... )
        >>> event.carbon_saved
        0.6
    """

    account_id: str
    meal_id: UUID
    source: str
    total_carbon: float
    carbon_saved: float
    is_plant_based: bool
    current_streak: int

    @classmethod
    def create(
        cls,
        account_id: str,
        meal_id: UUID,
        source: str,
        total_carbon: float,
        carbon_saved: float,
        is_plant_based: bool,
        current_streak: int,
    ) -> "MealLogged":
        return cls(
            event_id=uuid4(),
            occurred_at=_now(),
            account_id=account_id,
            meal_id=meal_id,
            source=source,
            total_carbon=total_carbon,
            carbon_saved=carbon_saved,
            is_plant_based=is_plant_based,
            current_streak=current_streak,
        )


@dataclass(frozen=True)
class MenuItemSelected(DomainEvent):
    """A menu item was picked by a student."""

    account_id: str
    item_id: str
    item_name: str
    selections: int

    @classmethod
    def create(
        cls, account_id: str, item_id: str, item_name: str, selections: int
    ) -> "MenuItemSelected":
        return cls(
            event_id=uuid4(),
            occurred_at=_now(),
            account_id=account_id,
            item_id=item_id,
            item_name=item_name,
            selections=selections,
        )


@dataclass(frozen=True)
class WasteLogged(DomainEvent):
    """A waste report was appended to the ledger."""

    account_id: str
    waste_id: str
    item_name: str
    quantity: str

    @classmethod
    def create(
        cls, account_id: str, waste_id: str, item_name: str, quantity: str
    ) -> "WasteLogged":
        return cls(
            event_id=uuid4(),
            occurred_at=_now(),
            account_id=account_id,
            waste_id=waste_id,
            item_name=item_name,
            quantity=quantity,
        )


@dataclass(frozen=True)
class MenuChanged(DomainEvent):
    """The cafeteria menu catalog was modified.

    Attributes:
        change: One of "added", "removed", "cleared".
        item_id: Affected item, None when the whole menu was cleared.
    """

    account_id: str
    change: str
    item_id: Optional[str]
    menu_size: int

    @classmethod
    def create(
        cls, account_id: str, change: str, item_id: Optional[str], menu_size: int
    ) -> "MenuChanged":
        if change not in ("added", "removed", "cleared"):
            raise ValueError(f"Invalid menu change: {change}")
        return cls(
            event_id=uuid4(),
            occurred_at=_now(),
            account_id=account_id,
            change=change,
            item_id=item_id,
            menu_size=menu_size,
        )
