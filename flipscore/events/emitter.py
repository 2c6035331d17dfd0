"""
Event system for the flipscore scoreboard.

The store announces each committed change to the roster and the scores here.
Adapters and loggers subscribe to the names they care about, or to all of
them at once.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("flipscore.events")


def _event_name(event_type: Union[str, Enum]) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Publishes scoreboard events to subscribed callbacks.

    Handlers run in subscription order. A handler that raises is logged and
    skipped, so a broken listener never undoes a committed transition.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._global_listeners: List[Callable] = []
        self._lock = threading.Lock()

    def on(self, event_type: Union[str, Enum], callback: Callable) -> Callable:
        """
        Subscribe to one event type.

        Args:
            event_type: Event name, or an ``EngineEventType`` member
            callback: Called with the event data dict

        Returns:
            A function that removes this subscription
        """
        name = _event_name(event_type)
        with self._lock:
            self._listeners[name].append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._listeners[name]:
                    self._listeners[name].remove(callback)

        return unsubscribe

    def on_any(self, callback: Callable) -> Callable:
        """
        Subscribe to every event.

        The callback receives an ``(event_name, data)`` tuple.
        """
        with self._lock:
            self._global_listeners.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._global_listeners:
                    self._global_listeners.remove(callback)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """Deliver an event to its subscribers, then to the catch-all ones."""
        name = _event_name(event_type)

        with self._lock:
            calls: List[Tuple[Callable, Any]] = [
                (callback, data) for callback in self._listeners.get(name, [])
            ]
            calls.extend((callback, (name, data)) for callback in self._global_listeners)

        # Handlers may subscribe or emit themselves, so call outside the lock
        for callback, payload in calls:
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in event handler for {name}: {e}", exc_info=True)


class EventBus:
    """
    Process-wide emitter.

    Stores that are not handed an emitter of their own publish here, so a
    presentation layer can listen without holding a reference to the store.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        with cls._lock:
            if cls._instance is None:
                cls._instance = EventEmitter()
            return cls._instance


class EngineEventType(Enum):
    """Event types emitted by the scoreboard store and control loop."""

    # Lifecycle
    STATE_LOADED = "state_loaded"
    STATE_SAVED = "state_saved"
    GAME_STARTED = "game_started"
    GAME_RESET = "game_reset"
    REMATCH = "rematch"
    ROUND_STARTED = "round_started"

    # Roster
    PLAYER_JOINED = "player_joined"
    PLAYER_LEFT = "player_left"

    # Scoring
    SCORE_RECORDED = "score_recorded"

    # History
    ACTION_UNDONE = "action_undone"
    ACTION_REJECTED = "action_rejected"
