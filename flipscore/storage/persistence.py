"""
Persistence of the scoreboard state between sessions.

The whole GameState is written as one JSON blob after every render and read
once at startup. A missing or unreadable blob is treated as if nothing had
been saved.
"""

import json
import logging
from typing import Optional

from flipscore.flip7.constants import STORAGE_KEY
from flipscore.flip7.errors import StateFormatError
from flipscore.flip7.state import GameState
from flipscore.storage.slot import SQLiteStateSlot

logger = logging.getLogger("flipscore.storage")


class StatePersistence:
    """
    Load and save GameState values through a key-value slot.
    """

    def __init__(
        self, slot: Optional[SQLiteStateSlot] = None, key: str = STORAGE_KEY
    ):
        """
        Args:
            slot: Slot to read from and write to, in-memory SQLite if None
            key: Key the state is stored under
        """
        self.slot = slot or SQLiteStateSlot()
        self.key = key

    def load(self) -> GameState:
        """
        Read the saved state.

        Returns:
            The saved state, or an empty scoreboard if nothing usable is stored
        """
        blob = self.slot.read(self.key)
        if blob is None:
            logger.debug(f"No saved state under {self.key!r}, starting empty")
            return GameState()

        try:
            return GameState.from_dict(json.loads(blob))
        except (json.JSONDecodeError, StateFormatError) as e:
            logger.warning(f"Discarding unreadable saved state under {self.key!r}: {e}")
            return GameState()

    def save(self, state: GameState) -> None:
        """Write the state, replacing the previous snapshot."""
        self.slot.write(self.key, json.dumps(state.to_dict()))

    def clear(self) -> None:
        self.slot.delete(self.key)
