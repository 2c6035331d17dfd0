"""
Presentation adapters for flipscore.

This package provides adapters that translate between the scoreboard store
and a concrete surface.
"""

from flipscore.adapters.base import PlatformAdapter
from flipscore.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "DummyAdapter"]
