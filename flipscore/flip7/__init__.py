"""
Flip 7 scoreboard model.

Immutable state, pure transitions and the derived view for keeping score in
a game of Flip 7.
"""

from flipscore.flip7.errors import (
    ScoreboardError,
    RosterFullError,
    NoPlayersError,
    NothingToUndoError,
    StateFormatError,
)
from flipscore.flip7.rules import ScoreRules, DEFAULT_RULES
from flipscore.flip7.state import PlayerState, GameState
from flipscore.flip7.transitions import (
    StateTransitionEngine,
    parse_score_input,
    score_delta,
)
from flipscore.flip7.view import PlayerView, ScoreStats, ScoreboardView, project

__all__ = [
    "ScoreboardError",
    "RosterFullError",
    "NoPlayersError",
    "NothingToUndoError",
    "StateFormatError",
    "ScoreRules",
    "DEFAULT_RULES",
    "PlayerState",
    "GameState",
    "StateTransitionEngine",
    "parse_score_input",
    "score_delta",
    "PlayerView",
    "ScoreStats",
    "ScoreboardView",
    "project",
]
