"""
Base adapter interface for the scoreboard.

This module defines the interface that presentation adapters must implement
to be driven by the ScoreKeeper control loop.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from enum import Enum

from flipscore.flip7.view import ScoreboardView


class PlatformAdapter(ABC):
    """
    Base interface for presentation adapters.

    Implementations paint the scoreboard view, tell the user why an action
    was refused and ask for confirmation before destructive actions. They
    bridge the platform-agnostic store and a concrete surface such as a
    Streamlit page or a test recorder.
    """

    @abstractmethod
    def render_view(self, view: ScoreboardView) -> None:
        """
        Paint the current scoreboard.

        Args:
            view: Projection of the current state
        """
        pass

    @abstractmethod
    def notify_rejection(self, message: str) -> None:
        """
        Tell the user an action was refused.

        Args:
            message: Human-readable reason
        """
        pass

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """
        Ask the user to confirm a destructive action.

        Args:
            prompt: Question to show

        Returns:
            True if the user agreed
        """
        pass

    # The following methods have default implementations but can be overridden

    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a scoreboard event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass
