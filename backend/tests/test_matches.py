import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from pinsheet.services.matches import (
    baker_lineup,
    baker_schedule,
    traditional_match_summary,
)
from pinsheet.services.validation import ValidationError


def test_baker_lineup_takes_first_five():
    assert baker_lineup(["a", "b", "c", "d", "e", "f"]) == ["a", "b", "c", "d", "e"]


def test_baker_lineup_needs_five_bowlers():
    with pytest.raises(ValidationError):
        baker_lineup(["a", "b", "c"])


def test_baker_schedule():
    schedule = baker_schedule(["a", "b", "c", "d", "e"])
    assert [slot["frameNumber"] for slot in schedule] == list(range(1, 11))
    assert [slot["playerId"] for slot in schedule] == list("abcdeabcde")


def test_traditional_match_summary():
    result = traditional_match_summary({"a": 150, "b": 99, "c": 210})
    assert result == {"playerScores": {"a": 150, "b": 99, "c": 210}, "teamTotal": 459}


def test_traditional_match_without_players():
    assert traditional_match_summary({}) == {"playerScores": {}, "teamTotal": 0}
