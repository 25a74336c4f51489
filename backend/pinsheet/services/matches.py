"""Team match helpers for traditional and Baker formats."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..scoring.bowling import BAKER_TEAM_SIZE, generate_baker_rotation
from .validation import validate_baker_lineup


def baker_lineup(roster: Sequence[str]) -> list[str]:
    """The first five rostered players bowl a Baker game."""
    return validate_baker_lineup(list(roster[:BAKER_TEAM_SIZE]))


def baker_schedule(roster: Sequence[str]) -> list[dict]:
    """Frame-by-frame bowler order for a Baker game."""
    rotation = generate_baker_rotation(baker_lineup(roster))
    return [
        {"frameNumber": frame, "playerId": player_id}
        for frame, player_id in sorted(rotation.items())
    ]


def traditional_match_summary(player_scores: Mapping[str, int]) -> dict:
    """Each player bowls a full game; the team score is their sum."""
    return {
        "playerScores": dict(player_scores),
        "teamTotal": sum(player_scores.values()),
    }
