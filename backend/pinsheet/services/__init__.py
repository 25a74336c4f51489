"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    validate_baker_lineup,
    validate_event,
    validate_frames,
    validate_pins,
)
from .stats import (
    calculate_player_stats,
    calculate_session_stats,
    calculate_team_stats,
    frames_for_games,
    pin_leave_frequency,
    recent_games,
    rolling_average,
    summarize_team_games,
)
from .practice import SPARE_DRILLS, get_drill, score_spare_session
from .matches import baker_schedule, traditional_match_summary

__all__ = [
    "ValidationError",
    "validate_baker_lineup",
    "validate_event",
    "validate_frames",
    "validate_pins",
    "calculate_player_stats",
    "calculate_session_stats",
    "calculate_team_stats",
    "frames_for_games",
    "pin_leave_frequency",
    "recent_games",
    "rolling_average",
    "summarize_team_games",
    "SPARE_DRILLS",
    "get_drill",
    "score_spare_session",
    "baker_schedule",
    "traditional_match_summary",
]
