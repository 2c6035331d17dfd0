"""
Storage for flipscore.

A single SQLite-backed key-value slot holding the serialized scoreboard.
"""

from flipscore.storage.slot import SQLiteStateSlot
from flipscore.storage.persistence import StatePersistence

__all__ = ["SQLiteStateSlot", "StatePersistence"]
