"""
State transition functions for the Flip 7 scoreboard.

This module provides pure functions for transitioning between scoreboard
states, without modifying the original state objects. A transition that has
nothing to do returns the very same state object it was given, which lets
the store tell a no-op apart from a real change without comparing values.
"""

import math
import re
from dataclasses import replace
from typing import List, Optional, Union

from flipscore.flip7.errors import NoPlayersError, RosterFullError
from flipscore.flip7.rules import DEFAULT_RULES, ScoreRules
from flipscore.flip7.state import GameState, PlayerState

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def _leading_int(raw_input: Union[str, int, float, None]) -> Optional[int]:
    """The integer a browser ``parseInt`` would read, or None for NaN."""
    if raw_input is None:
        return None
    if isinstance(raw_input, bool):
        raise TypeError("score input must be text or a number")
    if isinstance(raw_input, float):
        return int(raw_input) if math.isfinite(raw_input) else None
    if isinstance(raw_input, int):
        return raw_input

    match = _LEADING_INT.match(raw_input)
    if not match:
        return None
    return int(match.group(1))


def parse_score_input(raw_input: Union[str, int, float, None]) -> int:
    """
    Parse a typed score the way a browser number field hands it over.

    Leading whitespace and a sign are accepted, anything after the digits is
    ignored ("12pts" is 12, "3.9" is 3) and input with no leading ASCII
    digits counts as 0.
    """
    value = _leading_int(raw_input)
    return 0 if value is None else value


def score_delta(
    raw_input: Union[str, int, float, None],
    flip_bonus: bool = False,
    is_crash: bool = False,
    rules: ScoreRules = DEFAULT_RULES,
) -> Optional[int]:
    """
    Work out how many points an entry is worth.

    Returns:
        The delta to apply, or None when the field holds no number and no
        bonus was ticked, which means nothing was entered at all. An
        explicit "0" still counts.
    """
    if is_crash:
        return 0

    value = _leading_int(raw_input)
    if value is None and not flip_bonus:
        return None

    value = value or 0
    if flip_bonus:
        value += rules.flip_bonus
    return value


def _advance_dealer(state: GameState) -> int:
    # An empty roster has no dealer to rotate to
    if not state.players:
        return 0
    return (state.dealer_index + 1) % len(state.players)


class StateTransitionEngine:
    """
    Pure functions for state transitions.

    This class contains static methods that implement scoreboard transitions.
    Each method takes a state and returns a new state, without modifying the
    original.
    """

    @staticmethod
    def add_player(
        state: GameState, name: str, rules: ScoreRules = DEFAULT_RULES
    ) -> GameState:
        """
        Add a player to the roster.

        Args:
            state: Current game state
            name: Name of the player to add, surrounding whitespace is dropped
            rules: Rules providing the roster capacity

        Returns:
            New game state with the player appended, or the same state if the
            name is blank

        Raises:
            RosterFullError: If the roster is already at capacity
        """
        name = (name or "").strip()
        if not name:
            return state

        if len(state.players) >= rules.max_players:
            raise RosterFullError(
                f"The table is full ({rules.max_players} players maximum)."
            )

        new_player = PlayerState(name=name)
        return replace(state, players=state.players + (new_player,))

    @staticmethod
    def remove_player(state: GameState, player_id: str) -> GameState:
        """
        Remove a player from the roster.

        Args:
            state: Current game state
            player_id: ID of the player to remove

        Returns:
            New game state with the player removed, or the same state if no
            player has that ID
        """
        if state.index_of(player_id) is None:
            return state

        new_players = tuple(p for p in state.players if p.id != player_id)
        return replace(state, players=new_players)

    @staticmethod
    def start_game(state: GameState) -> GameState:
        """
        Leave the setup phase with the first player dealing.

        Raises:
            NoPlayersError: If the roster is empty
        """
        if not state.players:
            raise NoPlayersError()
        return replace(state, started=True, dealer_index=0)

    @staticmethod
    def record_score(
        state: GameState,
        player_id: str,
        raw_input: Union[str, int, None],
        flip_bonus: bool = False,
        is_crash: bool = False,
        rules: ScoreRules = DEFAULT_RULES,
    ) -> GameState:
        """
        Add a round result to one player's score.

        Args:
            state: Current game state
            player_id: ID of the scoring player
            raw_input: Points as typed, parsed with ``parse_score_input``
            flip_bonus: Whether the Flip 7 bonus applies
            is_crash: Whether the player busted, which scores 0 regardless

        Returns:
            New game state with the score and ghost delta updated, or the
            same state if nothing was entered or the player is unknown
        """
        index = state.index_of(player_id)
        if index is None:
            return state

        delta = score_delta(raw_input, flip_bonus, is_crash, rules)
        if delta is None:
            return state

        player = state.players[index]
        new_player = replace(player, score=player.score + delta, last_delta=delta)

        new_players = list(state.players)
        new_players[index] = new_player
        return replace(state, players=tuple(new_players))

    @staticmethod
    def next_round(state: GameState) -> GameState:
        """Move to the next round and pass the deal to the next player."""
        return replace(
            state, round=state.round + 1, dealer_index=_advance_dealer(state)
        )

    @staticmethod
    def rematch_winners(
        state: GameState, rules: ScoreRules = DEFAULT_RULES
    ) -> List[PlayerState]:
        """
        Find the players credited with a win when the game is replayed.

        Every player sharing the top score counts, as long as that score
        reaches the win threshold.
        """
        if not state.players:
            return []

        top_score = max(p.score for p in state.players)
        if not rules.is_winning_score(top_score):
            return []
        return [p for p in state.players if p.score == top_score]

    @staticmethod
    def rematch(state: GameState, rules: ScoreRules = DEFAULT_RULES) -> GameState:
        """
        Tally wins and start a fresh game with the same roster.

        Returns:
            New game state with winners credited, scores and ghost deltas
            cleared, round back at 1 and the deal passed on
        """
        winner_ids = {p.id for p in StateTransitionEngine.rematch_winners(state, rules)}

        new_players = tuple(
            replace(
                p,
                wins=p.wins + 1 if p.id in winner_ids else p.wins,
                score=0,
                last_delta=None,
            )
            for p in state.players
        )

        return replace(
            state,
            players=new_players,
            round=1,
            dealer_index=_advance_dealer(state),
        )

    @staticmethod
    def reset_all(state: GameState) -> GameState:
        """Discard the roster and every score."""
        return GameState()
