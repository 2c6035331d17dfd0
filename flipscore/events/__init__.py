"""
Event system for flipscore.

This package provides the emitter and global bus the scoreboard store
publishes its transitions on.
"""

from flipscore.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
