"""
Tests for the table and chart helpers of the Streamlit scoreboard.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from flipscore.flip7.state import GameState, PlayerState
from flipscore.flip7.view import project
import flipscore.ui.scoreboard_ui as scoreboard_ui
from flipscore.ui.scoreboard_ui import score_chart, shared_slot, standings_frame


def make_view():
    return project(
        GameState(
            players=(
                PlayerState(id="a", name="Alice", score=40, last_delta=12),
                PlayerState(id="b", name="Bob", score=205, wins=2),
            ),
            started=True,
        )
    )


def test_standings_frame_best_first():
    frame = standings_frame(make_view())

    assert list(frame.columns) == ["Rank", "Player", "Score", "Last", "Wins"]
    assert list(frame["Player"]) == ["Bob", "Alice"]
    assert list(frame["Last"]) == ["", "+12"]


def test_standings_frame_empty():
    frame = standings_frame(project(GameState()))
    assert frame.empty


def test_score_chart_draws_target_line():
    fig = score_chart(make_view())
    try:
        ax = fig.axes[0]
        assert len(ax.patches) == 2
        assert ax.lines[0].get_ydata()[0] == 200
    finally:
        plt.close(fig)


def test_sessions_share_one_slot(tmp_path, monkeypatch):
    monkeypatch.setattr(scoreboard_ui, "DB_PATH", str(tmp_path / "scores.db"))
    shared_slot.clear()

    slot = shared_slot()
    try:
        assert shared_slot() is slot
        assert slot.db_path == str(tmp_path / "scores.db")
    finally:
        slot.close()
        shared_slot.clear()
