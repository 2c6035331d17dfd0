"""
Flip 7 scoreboard UI for flipscore.

This module provides a Streamlit-based page for keeping score at the table:
a card per player with a points field, the Flip 7 bonus toggle and a crash
button, plus the round controls, a standings table and a score chart.

Run it with ``streamlit run flipscore/ui/scoreboard_ui.py``.
"""

import os
from typing import Any, Dict, Union
from enum import Enum

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from flipscore.adapters import PlatformAdapter
from flipscore.engine import ScoreKeeper
from flipscore.engine.scorekeeper import CONFIRM_REMATCH, CONFIRM_RESET
from flipscore.events import EventEmitter
from flipscore.flip7.view import ScoreboardView
from flipscore.storage import SQLiteStateSlot, StatePersistence

DB_PATH = os.getenv("FLIPSCORE_DB", "flipscore.db")
CARDS_PER_ROW = 3


class StreamlitAdapter(PlatformAdapter):
    """
    Adapter that hands views and notices to the Streamlit page.

    Streamlit paints top to bottom on every rerun, so the adapter only
    stores what it is given in the session state; the page reads it back
    when it draws. Confirmation is a two-step button: the first click arms
    the prompt, the second click grants it.
    """

    def __init__(self):
        if "notices" not in st.session_state:
            st.session_state.notices = []
            st.session_state.view = None
            st.session_state.pending_confirm = None
            st.session_state.confirm_granted = False

    def render_view(self, view: ScoreboardView) -> None:
        st.session_state.view = view

    def notify_rejection(self, message: str) -> None:
        st.session_state.notices.append(message)

    def confirm(self, prompt: str) -> bool:
        granted = st.session_state.confirm_granted
        st.session_state.confirm_granted = False
        st.session_state.pending_confirm = None
        return granted

    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        if event_type == "REMATCH" and data.get("winner_names"):
            st.session_state.notices.append(
                f"Winner: {', '.join(data['winner_names'])}"
            )


@st.cache_resource
def shared_slot() -> SQLiteStateSlot:
    """
    The one SQLite slot every browser session of this server writes to.

    Cached per process so sessions share a single connection instead of
    opening one each.
    """
    return SQLiteStateSlot(DB_PATH)


def get_keeper() -> ScoreKeeper:
    """Return this browser session's scorekeeper, creating it on first use."""
    if "keeper" not in st.session_state:
        adapter = StreamlitAdapter()
        keeper = ScoreKeeper(
            adapter,
            persistence=StatePersistence(shared_slot()),
            event_bus=EventEmitter(),
        )
        keeper.render()
        st.session_state.keeper = keeper
    return st.session_state.keeper


def request(keeper: ScoreKeeper, intent: str, **kwargs) -> None:
    """Dispatch an intent and rerun the page so it shows the new state."""
    keeper.dispatch(intent, **kwargs)
    st.rerun()


def request_confirmed(intent: str) -> None:
    """Arm the confirmation step for a destructive intent."""
    st.session_state.pending_confirm = intent
    st.rerun()


def standings_frame(view: ScoreboardView) -> pd.DataFrame:
    """Standings as a table, best score first."""
    rows = [
        {
            "Rank": player.rank,
            "Player": player.name,
            "Score": player.score,
            "Last": player.ghost,
            "Wins": player.wins,
        }
        for player in view.standings()
    ]
    return pd.DataFrame(rows, columns=["Rank", "Player", "Score", "Last", "Wins"])


def score_chart(view: ScoreboardView):
    """Bar chart of the scores in seating order, with the target line."""
    fig, ax = plt.subplots(figsize=(8, 3))
    names = [p.name for p in view.players]
    scores = [p.score for p in view.players]
    colors = ["tab:orange" if p.is_winner else "tab:blue" for p in view.players]

    ax.bar(names, scores, color=colors)
    ax.axhline(view.stats.target, color="tab:red", linestyle="--", label="Target")
    ax.set_ylabel("Points")
    ax.set_title(f"Round {view.round}")
    ax.legend()
    ax.grid(True, axis="y")
    return fig


def render_player_card(keeper: ScoreKeeper, view: ScoreboardView, player) -> None:
    title = f"#{player.rank} {player.name}"
    if player.is_dealer:
        title += " 🃏"
    if player.is_winner:
        title += " 🏆"

    with st.container(border=True):
        st.markdown(f"**{title}**")
        st.metric("Score", player.score, delta=player.ghost or None)
        if player.wins:
            st.caption(f"Wins: {player.wins}")

        if not view.started:
            if st.button("Remove", key=f"remove-{player.id}"):
                request(keeper, "remove_player", player_id=player.id)
            return

        with st.form(f"score-{player.id}", clear_on_submit=True):
            points = st.text_input("Pts", key=f"input-{player.id}")
            bonus = st.checkbox("⚡F7 (+15)", key=f"check-{player.id}")
            ok_col, crash_col = st.columns(2)
            with ok_col:
                ok = st.form_submit_button("OK")
            with crash_col:
                crash = st.form_submit_button("Crash")

        if ok or crash:
            request(
                keeper,
                "record_score",
                player_id=player.id,
                raw_input=points,
                flip_bonus=bonus,
                is_crash=crash,
            )


def render_confirmation(keeper: ScoreKeeper) -> None:
    intent = st.session_state.pending_confirm
    prompt = CONFIRM_REMATCH if intent == "rematch" else CONFIRM_RESET
    st.warning(prompt)
    yes_col, no_col = st.columns(2)
    with yes_col:
        if st.button("Confirm", key="confirm-yes"):
            st.session_state.confirm_granted = True
            request(keeper, intent)
    with no_col:
        if st.button("Cancel", key="confirm-no"):
            st.session_state.pending_confirm = None
            st.rerun()


def run_streamlit_app():
    """Run the Streamlit app."""
    st.set_page_config(page_title="Flip 7 Scoreboard", layout="wide")
    st.title("Flip 7 Scoreboard")

    keeper = get_keeper()
    view = st.session_state.view or keeper.view()

    for notice in st.session_state.notices:
        st.toast(notice)
    st.session_state.notices = []

    if st.session_state.pending_confirm:
        render_confirmation(keeper)

    if not view.started:
        with st.form("add_player_form", clear_on_submit=True):
            name = st.text_input("New player")
            if st.form_submit_button("Add Player"):
                request(keeper, "add_player", name=name)
        if st.button("Start Game"):
            request(keeper, "start_game")
    else:
        st.subheader(f"Round {view.round}")
        cols = st.columns(4)
        with cols[0]:
            if st.button("Next Round"):
                request(keeper, "next_round")
        with cols[1]:
            if st.button("Undo", disabled=not keeper.store.can_undo):
                request(keeper, "undo")
        with cols[2]:
            if st.button("Rematch"):
                request_confirmed("rematch")
        with cols[3]:
            if st.button("Reset"):
                request_confirmed("reset_all")

    if not view.started and keeper.store.can_undo:
        if st.button("Undo"):
            request(keeper, "undo")

    for start in range(0, len(view.players), CARDS_PER_ROW):
        row = view.players[start : start + CARDS_PER_ROW]
        for col, player in zip(st.columns(CARDS_PER_ROW), row):
            with col:
                render_player_card(keeper, view, player)

    st.divider()
    if view.status_message:
        st.caption(view.status_message)
    else:
        stats = view.stats
        cols = st.columns(4)
        cols[0].metric("Total", stats.total)
        cols[1].metric("Average", stats.average)
        cols[2].metric("Leader gap", stats.leader_gap)
        cols[3].metric("Target", stats.target)

        table_col, chart_col = st.columns([1, 2])
        with table_col:
            st.dataframe(standings_frame(view), hide_index=True)
        with chart_col:
            st.pyplot(score_chart(view))


if __name__ == "__main__":
    run_streamlit_app()
