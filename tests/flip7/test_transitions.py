"""
Tests for the pure scoreboard transitions.

Each transition must leave its input untouched and return the very same
object when there is nothing to do.
"""

import unittest

import pytest

from flipscore.flip7.errors import NoPlayersError, RosterFullError
from flipscore.flip7.rules import ScoreRules
from flipscore.flip7.state import GameState, PlayerState
from flipscore.flip7.transitions import (
    StateTransitionEngine,
    parse_score_input,
    score_delta,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12", 12),
        ("  7", 7),
        ("-5", -5),
        ("+4", 4),
        ("3.9", 3),
        ("12pts", 12),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (8, 8),
        ("\u0663\u0660", 0),
        (7.9, 7),
        (float("nan"), 0),
        (float("inf"), 0),
    ],
)
def test_parse_score_input(raw, expected):
    assert parse_score_input(raw) == expected


def test_score_delta_empty_field_is_nothing():
    assert score_delta("") is None
    assert score_delta(None) is None


def test_score_delta_explicit_zero_counts():
    assert score_delta("0") == 0
    assert score_delta(" -0") == 0
    assert score_delta(0) == 0


@pytest.mark.parametrize("raw", ["abc", "   ", "pts12", "\u0663\u0660", float("nan")])
def test_score_delta_unparseable_is_nothing(raw):
    assert score_delta(raw) is None


def test_score_delta_unparseable_with_bonus_scores_bonus():
    assert score_delta("abc", flip_bonus=True) == 15


def test_score_delta_bonus_and_crash():
    assert score_delta("5", flip_bonus=True) == 20
    assert score_delta("", flip_bonus=True) == 15
    assert score_delta("40", flip_bonus=True, is_crash=True) == 0
    assert score_delta("", is_crash=True) == 0


def test_score_delta_uses_rule_bonus():
    assert score_delta("5", flip_bonus=True, rules=ScoreRules(flip_bonus=10)) == 15


class TestRosterTransitions(unittest.TestCase):
    """Adding, removing and starting."""

    def setUp(self):
        self.state = GameState()

    def test_add_player_appends_in_order(self):
        state = self.state
        for name in ["Alice", "Bob", "Carol"]:
            state = StateTransitionEngine.add_player(state, name)

        self.assertEqual([p.name for p in state.players], ["Alice", "Bob", "Carol"])
        self.assertEqual(len({p.id for p in state.players}), 3)
        self.assertEqual(self.state.players, ())

    def test_add_player_trims_name(self):
        state = StateTransitionEngine.add_player(self.state, "  Alice \n")
        self.assertEqual(state.players[0].name, "Alice")

    def test_add_blank_name_is_noop(self):
        self.assertIs(StateTransitionEngine.add_player(self.state, "   "), self.state)
        self.assertIs(StateTransitionEngine.add_player(self.state, ""), self.state)

    def test_add_player_when_full(self):
        state = GameState(players=[PlayerState(name=f"P{i}") for i in range(12)])
        with self.assertRaises(RosterFullError):
            StateTransitionEngine.add_player(state, "Thirteenth")

    def test_add_player_respects_rule_capacity(self):
        rules = ScoreRules(max_players=2)
        state = StateTransitionEngine.add_player(self.state, "A", rules)
        state = StateTransitionEngine.add_player(state, "B", rules)
        with self.assertRaises(RosterFullError):
            StateTransitionEngine.add_player(state, "C", rules)

    def test_add_player_keeps_other_scores(self):
        state = GameState(players=[PlayerState(name="Alice", score=30)], started=True)
        state = StateTransitionEngine.add_player(state, "Bob")
        self.assertEqual(state.players[0].score, 30)
        self.assertEqual(state.players[1].score, 0)

    def test_remove_player(self):
        state = GameState(
            players=[PlayerState(id="a", name="A"), PlayerState(id="b", name="B")]
        )
        new_state = StateTransitionEngine.remove_player(state, "a")
        self.assertEqual([p.id for p in new_state.players], ["b"])
        self.assertEqual(len(state.players), 2)

    def test_remove_unknown_player_is_noop(self):
        state = GameState(players=[PlayerState(id="a", name="A")])
        self.assertIs(StateTransitionEngine.remove_player(state, "zzz"), state)

    def test_start_game(self):
        state = GameState(players=[PlayerState(name="A")], dealer_index=3)
        started = StateTransitionEngine.start_game(state)
        self.assertTrue(started.started)
        self.assertEqual(started.dealer_index, 0)

    def test_start_game_without_players(self):
        with self.assertRaises(NoPlayersError):
            StateTransitionEngine.start_game(self.state)


class TestScoringTransitions(unittest.TestCase):
    """Recording scores, rounds, rematch and reset."""

    def setUp(self):
        self.state = GameState(
            players=[
                PlayerState(id="a", name="Alice"),
                PlayerState(id="b", name="Bob"),
            ],
            started=True,
        )

    def test_record_score_sets_ghost(self):
        state = StateTransitionEngine.record_score(self.state, "a", "12")
        alice = state.find_player("a")
        self.assertEqual(alice.score, 12)
        self.assertEqual(alice.last_delta, 12)
        self.assertIsNone(state.find_player("b").last_delta)

    def test_record_empty_input_is_noop(self):
        self.assertIs(StateTransitionEngine.record_score(self.state, "a", ""), self.state)

    def test_record_unparseable_input_is_noop(self):
        self.assertIs(
            StateTransitionEngine.record_score(self.state, "a", "abc"), self.state
        )
        self.assertIs(
            StateTransitionEngine.record_score(self.state, "a", float("nan")),
            self.state,
        )

    def test_record_crash_records_zero(self):
        state = StateTransitionEngine.record_score(
            self.state, "a", "", flip_bonus=True, is_crash=True
        )
        alice = state.find_player("a")
        self.assertEqual(alice.score, 0)
        self.assertEqual(alice.last_delta, 0)

    def test_record_negative_score(self):
        state = StateTransitionEngine.record_score(self.state, "b", "-7")
        self.assertEqual(state.find_player("b").score, -7)

    def test_record_unknown_player_is_noop(self):
        self.assertIs(
            StateTransitionEngine.record_score(self.state, "zzz", "10"), self.state
        )

    def test_next_round_rotates_dealer(self):
        state = StateTransitionEngine.next_round(self.state)
        self.assertEqual(state.round, 2)
        self.assertEqual(state.dealer_index, 1)

        state = StateTransitionEngine.next_round(state)
        self.assertEqual(state.round, 3)
        self.assertEqual(state.dealer_index, 0)

    def test_next_round_on_empty_roster_holds_dealer(self):
        state = StateTransitionEngine.next_round(GameState(started=True, dealer_index=0))
        self.assertEqual(state.round, 2)
        self.assertEqual(state.dealer_index, 0)

    def test_rematch_without_winner(self):
        state = StateTransitionEngine.record_score(self.state, "a", "150")
        state = StateTransitionEngine.rematch(state)
        self.assertEqual([p.wins for p in state.players], [0, 0])
        self.assertEqual([p.score for p in state.players], [0, 0])
        self.assertTrue(all(p.last_delta is None for p in state.players))
        self.assertTrue(state.started)

    def test_rematch_on_empty_roster(self):
        state = StateTransitionEngine.rematch(GameState(started=True, round=4))
        self.assertEqual(state.round, 1)
        self.assertEqual(state.dealer_index, 0)

    def test_reset_all(self):
        state = StateTransitionEngine.reset_all(self.state)
        self.assertEqual(state, GameState())


def test_rematch_ties_above_threshold_all_win(three_players):
    winners = StateTransitionEngine.rematch_winners(three_players)
    assert [p.name for p in winners] == ["Alice", "Bob"]

    state = StateTransitionEngine.rematch(three_players)
    assert [p.wins for p in state.players] == [1, 1, 0]
    assert [p.score for p in state.players] == [0, 0, 0]
    assert state.round == 1
    assert state.dealer_index == 0
    assert state.started is True


def test_rematch_winner_must_hold_top_score(three_players):
    state = StateTransitionEngine.record_score(three_players, "b", "5")
    state = StateTransitionEngine.rematch(state)
    assert [p.wins for p in state.players] == [0, 1, 0]


def test_next_round_wraps_three_players(three_players):
    state = StateTransitionEngine.next_round(three_players)
    assert state.dealer_index == 0
    assert state.round == 8
