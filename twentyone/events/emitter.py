"""
Event system for the round engine.

The engine reports every state change through an `EventEmitter` handed to it
at construction. Presentation layers subscribe to the event types they care
about; payloads are plain dicts of names, card labels and totals, and it is up
to the subscriber to turn them into text.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Optional, Union
import logging
import threading
import time
from enum import Enum

logger = logging.getLogger("twentyone.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EngineEventType(Enum):
    """
    Event types emitted by the round engine, in roughly the order they occur
    during a round.
    """

    ROUND_STARTED = "round_started"
    CARD_DEALT = "card_dealt"
    NATURAL_BLACKJACK = "natural_blackjack"
    TURN_CHANGED = "turn_changed"
    PLAYER_ACTION = "player_action"
    HAND_BUSTED = "hand_busted"
    DECK_RESHUFFLED = "deck_reshuffled"
    DEALER_TURN_STARTED = "dealer_turn_started"
    CARD_REVEALED = "card_revealed"
    DEALER_ACTION = "dealer_action"
    HAND_RESULT = "hand_result"
    ROUND_ENDED = "round_ended"


class EventEmitter:
    """
    Priority-ordered publish/subscribe hub.

    Features:
    - Subscription per event type, with priorities
    - Once-only subscriptions
    - Subscribing to all events with event type filtering in handler
    - Thread-safe listener registration
    """

    def __init__(self):
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _key(event_type: Union[str, Enum]) -> str:
        if isinstance(event_type, Enum):
            return event_type.name
        return event_type

    @staticmethod
    def _insert(handlers, handler) -> None:
        # Higher priorities first, insertion order within a priority
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                return
        handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        event_type = self._key(event_type)
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert(self._listeners[event_type], handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[event_type]
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in self._global_listeners:
                    self._global_listeners.remove(handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        A ``timestamp`` is added to the payload when missing. Exceptions
        raised by listeners are logged and do not reach the emitter's caller.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        event_type = self._key(event_type)
        data.setdefault("timestamp", time.time())

        handlers_to_call = []

        with self._listener_lock:
            for handler in self._listeners.get(event_type, []):
                handlers_to_call.append((handler["callback"], data))

            for handler in self._global_listeners:
                handlers_to_call.append((handler["callback"], (event_type, data)))

        # Call handlers outside of the lock to avoid deadlocks
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def listener_count(self, event_type: Optional[Union[str, Enum]] = None) -> int:
        """Number of listeners for one event type, or for all events."""
        with self._listener_lock:
            if event_type is None:
                return sum(len(h) for h in self._listeners.values()) + len(
                    self._global_listeners
                )
            return len(self._listeners.get(self._key(event_type), []))

    def remove_all_listeners(
        self, event_type: Optional[Union[str, Enum]] = None
    ) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners[self._key(event_type)].clear()
