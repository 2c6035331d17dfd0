"""
Derived view of the scoreboard.

``project`` turns a GameState into everything a presentation layer needs to
paint: ranks, winner and dealer flags, ghost deltas and the footer
statistics. It holds nothing between calls and never touches its input, so
it is simply called again after every transition.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from flipscore.flip7.constants import WAITING_FOR_PLAYERS
from flipscore.flip7.rules import DEFAULT_RULES, ScoreRules
from flipscore.flip7.state import GameState


def format_delta(delta: Optional[int]) -> str:
    """Render a ghost delta: signed when non-zero, blank when there is none."""
    if delta is None:
        return ""
    if delta > 0:
        return f"+{delta}"
    return str(delta)


@dataclass(frozen=True)
class PlayerView:
    id: str
    name: str
    score: int
    wins: int
    last_delta: Optional[int]
    rank: int
    is_winner: bool
    is_dealer: bool

    @property
    def ghost(self) -> str:
        return format_delta(self.last_delta)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "wins": self.wins,
            "last_delta": self.last_delta,
            "ghost": self.ghost,
            "rank": self.rank,
            "is_winner": self.is_winner,
            "is_dealer": self.is_dealer,
        }


@dataclass(frozen=True)
class ScoreStats:
    """
    Footer statistics.

    Attributes:
        total: Sum of all scores
        average: Floor of the mean score, None when there are no players
        leader_gap: Lead of the top score over the second one, 0 with fewer than two players
        target: Score that marks a winner
        player_count: Number of players on the roster
    """

    total: int
    average: Optional[int]
    leader_gap: int
    target: int
    player_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "average": self.average,
            "leader_gap": self.leader_gap,
            "target": self.target,
            "player_count": self.player_count,
        }


@dataclass(frozen=True)
class ScoreboardView:
    players: Tuple[PlayerView, ...]
    stats: ScoreStats
    started: bool
    round: int

    @property
    def status_message(self) -> Optional[str]:
        if not self.players:
            return WAITING_FOR_PLAYERS
        return None

    @property
    def dealer(self) -> Optional[PlayerView]:
        for player in self.players:
            if player.is_dealer:
                return player
        return None

    def standings(self) -> List[PlayerView]:
        """Players ordered by rank rather than by seat."""
        return sorted(self.players, key=lambda p: p.rank)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players],
            "stats": self.stats.to_dict(),
            "started": self.started,
            "round": self.round,
            "status_message": self.status_message,
        }


def project(state: GameState, rules: ScoreRules = DEFAULT_RULES) -> ScoreboardView:
    """
    Build the render-ready view of a game state.

    Args:
        state: State to project
        rules: Rules providing the win threshold

    Returns:
        ScoreboardView with one row per player, in roster order
    """
    # sorted() is stable, so equal scores keep their seating order
    by_score = sorted(state.players, key=lambda p: -p.score)
    ranks = {player.id: i + 1 for i, player in enumerate(by_score)}

    dealer = state.dealer
    rows = tuple(
        PlayerView(
            id=player.id,
            name=player.name,
            score=player.score,
            wins=player.wins,
            last_delta=player.last_delta,
            rank=ranks[player.id],
            is_winner=rules.is_winning_score(player.score),
            is_dealer=dealer is not None and dealer.id == player.id,
        )
        for player in state.players
    )

    total = sum(p.score for p in state.players)
    count = len(state.players)
    stats = ScoreStats(
        total=total,
        average=total // count if count else None,
        leader_gap=by_score[0].score - by_score[1].score if count > 1 else 0,
        target=rules.win_threshold,
        player_count=count,
    )

    return ScoreboardView(
        players=rows, stats=stats, started=state.started, round=state.round
    )
