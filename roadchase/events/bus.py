"""Event bus for pub/sub communication."""

from collections import defaultdict
from typing import Callable, Dict, List, Optional, Type, TypeVar

from roadchase.events.types import SimulationEvent

T = TypeVar("T", bound=SimulationEvent)
EventHandler = Callable[[SimulationEvent], None]


class EventBus:
    """
    Pub/sub bus that lets UI and audio collaborators follow the simulation.

    Systems emit events without knowing who listens. Handlers run
    synchronously inside the tick that emitted the event.

    Example:
        bus = EventBus()
        bus.subscribe(ChaseStarted, lambda e: print(e.pursuer_id))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[SimulationEvent], List[EventHandler]] = defaultdict(list)
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for all events."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def emit(self, event: SimulationEvent) -> None:
        """
        Emit an event to all registered handlers.

        Handlers for the specific event type are called first,
        then global handlers that receive all events.
        """
        for handler in self._handlers[type(event)]:
            handler(event)

        for handler in self._global_handlers:
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        self._global_handlers.clear()

    def handler_count(self, event_type: Optional[Type[SimulationEvent]] = None) -> int:
        """
        Get the number of registered handlers.

        Args:
            event_type: If provided, count handlers for this type only.
                       If None, count all handlers including global.
        """
        if event_type is None:
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._global_handlers)
        return len(self._handlers[event_type])
