"""
Pytest configuration for the flipscore test suite.

This module contains fixtures shared by the store, view and persistence
tests.
"""

import pytest

from flipscore.events import EventBus, EventEmitter
from flipscore.flip7.state import GameState, PlayerState


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def emitter():
    """A private event emitter, so tests can listen without the global bus."""
    return EventEmitter()


@pytest.fixture
def three_players():
    """A started game with Alice, Bob and Carol, dealer on Carol."""
    return GameState(
        players=(
            PlayerState(id="a", name="Alice", score=210),
            PlayerState(id="b", name="Bob", score=210),
            PlayerState(id="c", name="Carol", score=190),
        ),
        started=True,
        round=7,
        dealer_index=2,
    )
