from typing import Any, Dict, Optional

from flipscore.flip7.constants import (
    FLIP_BONUS,
    HISTORY_DEPTH,
    MAX_PLAYERS,
    WIN_THRESHOLD,
)


class ScoreRules:
    def __init__(
        self,
        win_threshold: int = WIN_THRESHOLD,
        flip_bonus: int = FLIP_BONUS,
        max_players: int = MAX_PLAYERS,
        history_depth: int = HISTORY_DEPTH,
    ):
        if max_players < 1:
            raise ValueError("max_players must be at least 1")
        if history_depth < 0:
            raise ValueError("history_depth cannot be negative")

        self.win_threshold = win_threshold
        self.flip_bonus = flip_bonus
        self.max_players = max_players
        self.history_depth = history_depth

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "win_threshold": self.win_threshold,
            "flip_bonus": self.flip_bonus,
            "max_players": self.max_players,
            "history_depth": self.history_depth,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ScoreRules":
        """Build rules from a config mapping, ignoring unknown keys."""
        data = data or {}
        known = ("win_threshold", "flip_bonus", "max_players", "history_depth")
        return cls(**{key: int(data[key]) for key in known if key in data})

    def is_winning_score(self, score: int) -> bool:
        """Check whether a score reaches the win threshold."""
        return score >= self.win_threshold

    def __eq__(self, other):
        if not isinstance(other, ScoreRules):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ScoreRules({self.to_dict()})"


DEFAULT_RULES = ScoreRules()
