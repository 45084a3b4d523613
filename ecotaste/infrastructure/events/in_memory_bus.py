"""In-memory event bus implementation.

Handlers are stored in memory and awaited one after the other, in
subscription order.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type

from ecotaste.domain.shared.events import DomainEvent
from ecotaste.domain.shared.ports.event_bus import TEvent

logger = logging.getLogger(__name__)


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus port.

    Error handling: a failing handler is logged and the remaining handlers
    still run. Publishing never raises because of a handler, so a command
    whose state change is already persisted is not reported as failed.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(MealLogged, MealLoggedHandler().handle)
        >>> await bus.publish(MealLogged.create(...))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[Callable[[Any], Awaitable[None]]]] = {}

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> None:
        """Subscribe a handler. The same handler may be subscribed twice."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            "Handler subscribed",
            extra={"event_type": event_type.__name__, "handler": _handler_name(handler)},
        )

    async def publish(self, event: TEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("No handlers for event", extra={"event_type": event_type.__name__})
            return

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event_type.__name__,
                        "event_id": str(event.event_id),
                        "handler": _handler_name(handler),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> bool:
        """Remove the first subscription of ``handler``. False if absent."""
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def clear(self) -> None:
        self._handlers.clear()

    def get_handler_count(self, event_type: Type[TEvent]) -> int:
        return len(self._handlers.get(event_type, []))
