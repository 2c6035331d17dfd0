"""
Immutable state models for the Flip 7 scoreboard.

This module provides dataclasses for representing the scoreboard in an
immutable manner. They are designed to be used with the pure transition
functions in ``flipscore.flip7.transitions``, which create new state
instances rather than modifying existing ones. Because a state value can
never change after creation, an earlier state kept for undo cannot be
aliased by a later transition.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple
import uuid

from flipscore.flip7.errors import StateFormatError


def _new_player_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PlayerState:
    """
    Immutable representation of one player on the scoreboard.

    Attributes:
        id: Unique identifier, stable for the player's lifetime
        name: Display name of the player
        score: Cumulative score for the current game, may be negative
        wins: Number of games won, counted at rematch
        last_delta: Most recent score adjustment, None until the first one
    """

    id: str = field(default_factory=_new_player_id)
    name: str = "Player"
    score: int = 0
    wins: int = 0
    last_delta: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "wins": self.wins,
            "lastDelta": self.last_delta,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerState":
        """
        Rebuild a player from its serialized form.

        Accepts blobs written by the browser scoreboard, where ids are
        millisecond timestamps and ``wins``/``lastDelta`` may be missing.

        Raises:
            StateFormatError: If a required field is missing or mistyped
        """
        if not isinstance(data, dict):
            raise StateFormatError(f"Player entry is not an object: {data!r}")

        try:
            raw_id = data["id"]
            name = data["name"]
            score = data.get("score", 0)
        except KeyError as e:
            raise StateFormatError(f"Player entry is missing {e}") from e

        wins = data.get("wins", 0)
        last_delta = data.get("lastDelta")

        if raw_id is None or raw_id == "":
            raise StateFormatError("Player entry has an empty id")
        if not isinstance(name, str) or not name.strip():
            raise StateFormatError(f"Player entry has an invalid name: {name!r}")
        for label, value in (("score", score), ("wins", wins)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise StateFormatError(f"Player {label} is not an integer: {value!r}")
        if last_delta is not None and (
            isinstance(last_delta, bool) or not isinstance(last_delta, int)
        ):
            raise StateFormatError(f"Player lastDelta is not an integer: {last_delta!r}")
        if wins < 0:
            raise StateFormatError(f"Player wins cannot be negative: {wins}")

        return cls(
            id=str(raw_id),
            name=name.strip(),
            score=score,
            wins=wins,
            last_delta=last_delta,
        )


@dataclass(frozen=True)
class GameState:
    """
    Immutable representation of the whole scoreboard.

    Attributes:
        players: Players in insertion order, which is also the display order
        started: Whether the game has left the setup phase
        round: Current round number, starting at 1
        dealer_index: Rotating dealer pointer, taken modulo the roster size
    """

    players: Tuple[PlayerState, ...] = ()
    started: bool = False
    round: int = 1
    dealer_index: int = 0

    def __post_init__(self):
        # Callers may hand in a list; store a tuple so the roster stays frozen
        if not isinstance(self.players, tuple):
            object.__setattr__(self, "players", tuple(self.players))

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_empty(self) -> bool:
        return not self.players

    def find_player(self, player_id: str) -> Optional[PlayerState]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def index_of(self, player_id: str) -> Optional[int]:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return None

    @property
    def dealer(self) -> Optional[PlayerState]:
        """The current dealer, or None before the game starts."""
        if not self.started or not self.players:
            return None
        return self.players[self.dealer_index % len(self.players)]

    def clone(self) -> "GameState":
        """Return a structural copy that shares no containers with this state."""
        return replace(self, players=tuple(replace(p) for p in self.players))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the game state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the game state
        """
        return {
            "players": [player.to_dict() for player in self.players],
            "started": self.started,
            "round": self.round,
            "dealerIndex": self.dealer_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a game state from ``to_dict`` output.

        The older browser layout (``gameStarted`` and no dealer pointer) is
        accepted as well.

        Raises:
            StateFormatError: If the data does not describe a valid state
        """
        if not isinstance(data, dict):
            raise StateFormatError(f"State is not an object: {type(data).__name__}")

        raw_players = data.get("players", [])
        if not isinstance(raw_players, list):
            raise StateFormatError("State players is not a list")

        players = tuple(PlayerState.from_dict(p) for p in raw_players)
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise StateFormatError("State contains duplicate player ids")

        started = data.get("started", data.get("gameStarted", False))
        round_number = data.get("round", 1)
        dealer_index = data.get("dealerIndex", 0)

        if not isinstance(started, bool):
            raise StateFormatError(f"State started flag is not a boolean: {started!r}")
        for label, value in (("round", round_number), ("dealerIndex", dealer_index)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise StateFormatError(f"State {label} is not an integer: {value!r}")
        if round_number < 1:
            raise StateFormatError(f"State round must be positive: {round_number}")
        if dealer_index < 0:
            raise StateFormatError(f"State dealerIndex cannot be negative: {dealer_index}")

        return cls(
            players=players,
            started=started,
            round=round_number,
            dealer_index=dealer_index,
        )
