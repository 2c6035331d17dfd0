"""
Owned state store for the Flip 7 scoreboard.

GameStore holds the current GameState and a short linear undo history. Every
operation is atomic: it either validates, snapshots the previous state,
swaps in the new one and announces it on the event bus, or it changes
nothing at all.
"""

import logging
from collections import deque
from typing import List, Optional, Union

from flipscore.events import EventBus, EventEmitter, EngineEventType
from flipscore.flip7.errors import NothingToUndoError
from flipscore.flip7.rules import DEFAULT_RULES, ScoreRules
from flipscore.flip7.state import GameState
from flipscore.flip7.transitions import StateTransitionEngine
from flipscore.flip7.view import ScoreboardView, project

logger = logging.getLogger("flipscore.engine")


class GameStore:
    """
    Current scoreboard state plus a bounded undo history.

    Snapshots are the previous immutable GameState values. The history keeps
    at most ``rules.history_depth`` of them and drops the oldest first.
    """

    def __init__(
        self,
        initial_state: Optional[GameState] = None,
        rules: Optional[ScoreRules] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Initialize the store.

        Args:
            initial_state: State to start from, an empty scoreboard if None
            rules: Scoring rules, the standard Flip 7 numbers if None
            event_bus: Emitter to publish transitions on, the global bus if None
        """
        self.rules = rules or DEFAULT_RULES
        self.event_bus = event_bus or EventBus.get_instance()
        self._state = initial_state or GameState()
        self._history = deque(maxlen=self.rules.history_depth)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def history_depth(self) -> int:
        return len(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def view(self) -> ScoreboardView:
        """Project the current state for presentation."""
        return project(self._state, self.rules)

    def _commit(self, new_state: GameState, event_type, data: dict) -> None:
        self._history.append(self._state)
        self._state = new_state
        self.event_bus.emit(event_type, data)

    def add_player(self, name: str) -> Optional[str]:
        """
        Add a player to the roster.

        Returns:
            ID of the new player, or None if the name was blank

        Raises:
            RosterFullError: If the roster is already full
        """
        new_state = StateTransitionEngine.add_player(self._state, name, self.rules)
        if new_state is self._state:
            return None

        player = new_state.players[-1]
        self._commit(
            new_state,
            EngineEventType.PLAYER_JOINED,
            {"player_id": player.id, "player_name": player.name},
        )
        logger.info(f"Player {player.name!r} joined ({player.id})")
        return player.id

    def remove_player(self, player_id: str) -> bool:
        """
        Remove a player from the roster.

        Returns:
            True if a player was removed, False if the ID was unknown
        """
        player = self._state.find_player(player_id)
        if player is None:
            logger.debug(f"Ignoring removal of unknown player {player_id}")
            return False

        new_state = StateTransitionEngine.remove_player(self._state, player_id)
        self._commit(
            new_state,
            EngineEventType.PLAYER_LEFT,
            {"player_id": player.id, "player_name": player.name},
        )
        logger.info(f"Player {player.name!r} left ({player.id})")
        return True

    def start_game(self) -> None:
        """
        Start the game with the first player dealing.

        Raises:
            NoPlayersError: If the roster is empty
        """
        new_state = StateTransitionEngine.start_game(self._state)
        self._commit(
            new_state,
            EngineEventType.GAME_STARTED,
            {"player_count": new_state.player_count},
        )

    def record_score(
        self,
        player_id: str,
        raw_input: Union[str, int, None],
        flip_bonus: bool = False,
        is_crash: bool = False,
    ) -> Optional[int]:
        """
        Record a round result for one player.

        Returns:
            The points added, or None if nothing was entered or the player
            is unknown
        """
        new_state = StateTransitionEngine.record_score(
            self._state, player_id, raw_input, flip_bonus, is_crash, self.rules
        )
        if new_state is self._state:
            if self._state.find_player(player_id) is None:
                logger.warning(f"Ignoring score for unknown player {player_id}")
            return None

        player = new_state.find_player(player_id)
        self._commit(
            new_state,
            EngineEventType.SCORE_RECORDED,
            {
                "player_id": player.id,
                "player_name": player.name,
                "delta": player.last_delta,
                "score": player.score,
                "flip_bonus": flip_bonus,
                "is_crash": is_crash,
            },
        )
        return player.last_delta

    def next_round(self) -> None:
        """Advance the round counter and rotate the deal."""
        new_state = StateTransitionEngine.next_round(self._state)
        dealer = new_state.dealer
        self._commit(
            new_state,
            EngineEventType.ROUND_STARTED,
            {
                "round": new_state.round,
                "dealer_id": dealer.id if dealer else None,
            },
        )

    def rematch(self) -> List[str]:
        """
        Credit the winners and replay with the same roster.

        Returns:
            IDs of the players credited with a win
        """
        winners = StateTransitionEngine.rematch_winners(self._state, self.rules)
        new_state = StateTransitionEngine.rematch(self._state, self.rules)
        winner_ids = [p.id for p in winners]
        self._commit(
            new_state,
            EngineEventType.REMATCH,
            {
                "winner_ids": winner_ids,
                "winner_names": [p.name for p in winners],
            },
        )
        logger.info(f"Rematch, winners: {[p.name for p in winners] or 'none'}")
        return winner_ids

    def reset_all(self) -> None:
        """Replace the scoreboard with an empty one. The history is kept."""
        new_state = StateTransitionEngine.reset_all(self._state)
        self._commit(new_state, EngineEventType.GAME_RESET, {})
        logger.info("Scoreboard reset")

    def undo(self) -> GameState:
        """
        Restore the state from before the most recent change.

        Returns:
            The restored state

        Raises:
            NothingToUndoError: If the history is empty
        """
        if not self._history:
            raise NothingToUndoError()

        self._state = self._history.pop()
        self.event_bus.emit(
            EngineEventType.ACTION_UNDONE, {"remaining": len(self._history)}
        )
        return self._state
