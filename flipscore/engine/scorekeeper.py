"""
Scorekeeper control loop.

This module provides the ScoreKeeper class, which ties the state store to a
presentation adapter and a persistence slot. Every user intent goes through
``dispatch``: the transition runs on the store, the state is projected, the
adapter paints the projection and the state is saved.
"""

import logging
import time
from typing import Any, Dict, Optional

from flipscore.adapters import PlatformAdapter
from flipscore.engine.store import GameStore
from flipscore.events import EventBus, EventEmitter, EngineEventType
from flipscore.flip7.constants import STORAGE_KEY
from flipscore.flip7.errors import ScoreboardError
from flipscore.flip7.rules import ScoreRules
from flipscore.flip7.view import ScoreboardView
from flipscore.storage import SQLiteStateSlot, StatePersistence

logger = logging.getLogger("flipscore.engine")

CONFIRM_REMATCH = "Start a new game with the same players?"
CONFIRM_RESET = "Reset everything? All players and scores will be lost."

# Intents that need the user's consent before they run
_CONFIRMATIONS = {
    "rematch": CONFIRM_REMATCH,
    "reset_all": CONFIRM_RESET,
}

INTENTS = (
    "add_player",
    "remove_player",
    "start_game",
    "record_score",
    "next_round",
    "rematch",
    "reset_all",
    "undo",
)


class ScoreKeeper:
    """
    Drives one scoreboard session.

    Configuration keys:
        rules: Mapping passed to ``ScoreRules.from_dict``
        db_path: SQLite file for the persistence slot, in-memory if missing
        storage_key: Key the state is saved under
    """

    def __init__(
        self,
        adapter: PlatformAdapter,
        config: Dict[str, Any] = None,
        persistence: Optional[StatePersistence] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Initialize the scorekeeper and load the saved state.

        Args:
            adapter: Presentation adapter to render to and confirm with
            config: Configuration options, see the class docstring
            persistence: Persistence to use instead of one built from config
            event_bus: Emitter for store events, the global bus if None
        """
        self.adapter = adapter
        self.config = config or {}
        self.rules = ScoreRules.from_dict(self.config.get("rules"))
        self.event_bus = event_bus or EventBus.get_instance()

        if persistence is None:
            slot = SQLiteStateSlot(self.config.get("db_path"))
            persistence = StatePersistence(
                slot, self.config.get("storage_key", STORAGE_KEY)
            )
        self.persistence = persistence

        initial_state = self.persistence.load()
        self.store = GameStore(initial_state, self.rules, self.event_bus)
        self._unsubscribe = self.event_bus.on_any(self._forward_event)

        self.event_bus.emit(
            EngineEventType.STATE_LOADED,
            {
                "player_count": initial_state.player_count,
                "started": initial_state.started,
                "round": initial_state.round,
                "timestamp": time.time(),
            },
        )

    def _forward_event(self, event):
        event_type, data = event
        self.adapter.notify_game_event(event_type, data)

    @property
    def state(self):
        return self.store.state

    def view(self) -> ScoreboardView:
        return self.store.view()

    def render(self) -> ScoreboardView:
        """
        Project the current state, paint it and save it.

        Returns:
            The view that was rendered
        """
        view = self.store.view()
        self.adapter.render_view(view)
        self.persistence.save(self.store.state)
        self.event_bus.emit(EngineEventType.STATE_SAVED, {"timestamp": time.time()})
        return view

    def dispatch(self, intent: str, **kwargs) -> Any:
        """
        Run one user intent and re-render.

        Rejected actions are reported through the adapter and leave the
        state untouched; a declined confirmation does nothing.

        Args:
            intent: One of ``INTENTS``
            **kwargs: Arguments for the matching GameStore method

        Returns:
            Whatever the store method returned, or None if the action was
            declined or rejected

        Raises:
            ValueError: If the intent name is unknown
        """
        if intent not in INTENTS:
            raise ValueError(f"Unknown intent: {intent}")

        prompt = _CONFIRMATIONS.get(intent)
        if prompt and not self.adapter.confirm(prompt):
            logger.debug(f"{intent} declined by the user")
            return None

        try:
            result = getattr(self.store, intent)(**kwargs)
        except ScoreboardError as e:
            logger.info(f"{intent} rejected: {e}")
            self.event_bus.emit(
                EngineEventType.ACTION_REJECTED,
                {"intent": intent, "reason": str(e)},
            )
            self.adapter.notify_rejection(str(e))
            return None

        self.render()
        return result

    def shutdown(self) -> None:
        """Stop forwarding events and close the persistence slot."""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        self.persistence.slot.close()
