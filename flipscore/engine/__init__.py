"""
Scoreboard engine for flipscore.

The owned state store with its undo history, and the control loop that
connects it to presentation and persistence.
"""

from flipscore.engine.store import GameStore
from flipscore.engine.scorekeeper import ScoreKeeper, INTENTS

__all__ = ["GameStore", "ScoreKeeper", "INTENTS"]
