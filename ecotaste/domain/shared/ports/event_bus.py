"""Event bus port (interface).

Defines the contract for event publishing and subscription. The domain
defines the port, infrastructure provides the implementation.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from ecotaste.domain.shared.events import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

# Event handler type: async function that takes an event and returns None
EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Interface for event publishing and subscription.

    Example usage (application layer):
        >>> async def on_meal_logged(event: MealLogged) -> None:
        ...     print(f"Meal {event.meal_id} logged")
        ...
        >>> event_bus.subscribe(MealLogged, on_meal_logged)
        >>> await event_bus.publish(MealLogged.create(...))
    """

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> None:
        """Subscribe a handler to an event type."""
        ...

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Note:
            - Handlers are called in subscription order
            - If a handler fails, other handlers still execute
        """
        ...

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> bool:
        """Unsubscribe a handler. Returns True if it was found and removed."""
        ...

    def clear(self) -> None:
        """Clear all event subscriptions."""
        ...
