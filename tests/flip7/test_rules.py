import pytest

from flipscore.flip7.rules import DEFAULT_RULES, ScoreRules


def test_defaults():
    assert DEFAULT_RULES.win_threshold == 200
    assert DEFAULT_RULES.flip_bonus == 15
    assert DEFAULT_RULES.max_players == 12
    assert DEFAULT_RULES.history_depth == 5


def test_from_dict_overrides_and_ignores_unknown():
    rules = ScoreRules.from_dict({"win_threshold": "150", "colour": "red"})
    assert rules.win_threshold == 150
    assert rules.flip_bonus == 15


def test_from_none():
    assert ScoreRules.from_dict(None) == DEFAULT_RULES


def test_round_trip():
    rules = ScoreRules(win_threshold=300, flip_bonus=20, max_players=6, history_depth=3)
    assert ScoreRules.from_dict(rules.to_dict()) == rules


def test_is_winning_score():
    assert DEFAULT_RULES.is_winning_score(200)
    assert not DEFAULT_RULES.is_winning_score(199)


@pytest.mark.parametrize("kwargs", [{"max_players": 0}, {"history_depth": -1}])
def test_invalid_rules(kwargs):
    with pytest.raises(ValueError):
        ScoreRules(**kwargs)
