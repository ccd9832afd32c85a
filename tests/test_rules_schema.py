import pytest
from pydantic import ValidationError

from watten.rules_schema import RuleSet, ScoringConfig


def test_defaults_match_the_standard_game():
    rules = RuleSet()

    assert rules.use_criticals and rules.use_schleck and not rules.use_blind
    assert rules.cutting_enabled
    assert rules.scoring == ScoringConfig(points_per_hand=2, target_score=11, tricks_to_win_hand=3)


def test_option_screen_keys_are_accepted():
    rules = RuleSet.from_mapping({"useCriticals": False, "useSchleck": True, "useBlind": True})

    assert not rules.use_criticals
    assert rules.use_blind
    assert not rules.cutting_enabled


def test_rules_are_frozen():
    rules = RuleSet()
    with pytest.raises(ValidationError):
        rules.use_blind = True


def test_invalid_scoring_rejected():
    with pytest.raises(ValidationError):
        ScoringConfig(tricks_to_win_hand=6)
    with pytest.raises(ValidationError):
        ScoringConfig(points_per_hand=0)
