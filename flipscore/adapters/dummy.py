"""
Dummy adapter for the scoreboard, used for testing and automation.

This module provides a non-interactive adapter that records what it is asked
to show and answers confirmations with a fixed value.
"""

from typing import Any, Dict, List, Optional, Union
from enum import Enum

from flipscore.adapters.base import PlatformAdapter
from flipscore.flip7.view import ScoreboardView


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for tests and scripted sessions.

    Every rendered view, rejection, confirmation prompt and event is kept
    for later inspection.
    """

    def __init__(self, auto_confirm: bool = True, verbose: bool = False):
        """
        Initialize the dummy adapter.

        Args:
            auto_confirm: Answer given to every confirmation prompt
            verbose: Whether to print views and notices to stdout
        """
        self.auto_confirm = auto_confirm
        self.verbose = verbose

        self.rendered_views: List[ScoreboardView] = []
        self.rejections: List[str] = []
        self.prompts: List[str] = []
        self.events = []

    @property
    def last_view(self) -> Optional[ScoreboardView]:
        return self.rendered_views[-1] if self.rendered_views else None

    def render_view(self, view: ScoreboardView) -> None:
        self.rendered_views.append(view)

        if self.verbose:
            print(f"\n=== Round {view.round} ===")
            for player in view.players:
                marker = " (dealer)" if player.is_dealer else ""
                print(
                    f"#{player.rank} {player.name}{marker}: {player.score} {player.ghost}"
                )
            if view.status_message:
                print(view.status_message)
            print("==================\n")

    def notify_rejection(self, message: str) -> None:
        self.rejections.append(message)
        if self.verbose:
            print(f"! {message}")

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.auto_confirm

    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        self.events.append((event_type, data))
