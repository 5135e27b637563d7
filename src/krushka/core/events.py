"""
Event bus system for KRUSHKA.

Carries player intents from the input collaborator to the session
controller, and session notifications back out to the simulator.
Intents are queued between frames and drained before the next tick.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict, deque
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input intents
    JUMP_START = auto()
    JUMP_RELEASE = auto()
    PAUSE_TOGGLE = auto()
    CONTINUE = auto()  # Context-sensitive continue / restart / demo stop
    DEMO_IDLE_TIMEOUT = auto()
    QUICK_JUMP = auto()

    # Session notifications
    PHASE_CHANGED = auto()
    LIFE_LOST = auto()
    GAME_RESET = auto()
    LEVEL_COMPLETED = auto()

    # System events
    SHUTDOWN = auto()


INTENT_TYPES = frozenset({
    EventType.JUMP_START,
    EventType.JUMP_RELEASE,
    EventType.PAUSE_TOGGLE,
    EventType.CONTINUE,
    EventType.DEMO_IDLE_TIMEOUT,
    EventType.QUICK_JUMP,
})


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.time)

    @property
    def is_intent(self) -> bool:
        return self.type in INTENT_TYPES


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Events can be emitted immediately or queued for batch processing
    at the next frame boundary.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._queue: deque[Event] = deque()
        self._event_history: deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to all events. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._event_history.append(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for the next frame boundary."""
        self._queue.append(event)

    def process_queue(self) -> int:
        """Dispatch all queued events in arrival order.

        Returns:
            Number of events dispatched
        """
        count = 0
        while self._queue:
            self.emit(self._queue.popleft())
            count += 1
        return count

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type, []) + self._global_handlers

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def get_history(
        self,
        event_type: EventType | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = list(self._event_history)
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()


def intent_event(event_type: EventType, source: str = "input") -> Event:
    """Create an input intent event."""
    if event_type not in INTENT_TYPES:
        raise ValueError(f"{event_type.name} is not an input intent")
    return Event(event_type, source=source)
