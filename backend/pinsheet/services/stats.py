from __future__ import annotations

import logging
import math
from collections import deque, defaultdict
from typing import Sequence, Iterable, Dict, List, Mapping, Optional, Tuple

from ..config import COMMON_LEAVES_LIMIT, STATS_GAME_LIMIT
from ..scoring.bowling import LAST_FRAME, Frame, Game
from ..scoring.pins import ALL_PINS, is_pocket_hit

logger = logging.getLogger(__name__)

PLAYER_STAT_FIELDS = (
    "averageScore",
    "highGame",
    "strikePercentage",
    "sparePercentage",
    "singlePinSparePercentage",
    "multiPinSparePercentage",
    "splitLeavesPercentage",
    "splitConversionPercentage",
    "openFramesPercentage",
    "gutterCount",
    "foulCount",
    "firstBallAverage",
    "pocketHitPercentage",
    "carryRate",
    "doublePercentage",
    "triplePercentage",
)


def round1(value: float) -> float:
    """Round half up to one decimal place (2.25 -> 2.3)."""
    return math.floor(value * 10 + 0.5) / 10


def _pct(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def empty_player_stats(player_id: str = "") -> Dict:
    stats: Dict = {"playerId": player_id, "totalGames": 0}
    stats.update({name: 0 for name in PLAYER_STAT_FIELDS})
    stats["commonLeaves"] = []
    return stats


def calculate_player_stats(
    games: Sequence[Game],
    frames: Sequence[Frame],
    *,
    leaves_limit: int = COMMON_LEAVES_LIMIT,
) -> Dict:
    """Aggregate a player's completed games into a stats snapshot.

    Rates are computed over frames 1-9 only. Doubles and triples are counted
    with overlapping windows: three strikes in a row count as one double and
    one triple, and four in a row as three doubles and two triples.

    Returns a dict keyed like ``PlayerStatsOut``.
    """
    if not games:
        return empty_player_stats()

    scores = [g.total_score for g in games]
    regular = [f for f in frames if f.frame_number < LAST_FRAME]
    total_frames = len(regular)
    logger.debug(
        "Aggregating %d games / %d regular frames for player %s",
        len(games),
        total_frames,
        games[0].player_id,
    )

    strikes = spares = opens = 0
    single_pin_spares = multi_pin_spares = 0
    split_leaves = split_conversions = 0
    gutters = fouls = 0
    first_ball_total = first_ball_count = 0
    pocket_hits = pocket_strikes = 0
    leaves: Dict[Tuple[int, ...], Dict[str, int]] = defaultdict(lambda: {"count": 0, "conversions": 0})

    for frame in regular:
        leave = frame.leave
        if frame.is_strike:
            strikes += 1
        elif frame.is_spare:
            spares += 1
            if leave is not None:
                if leave.count == 1:
                    single_pin_spares += 1
                else:
                    multi_pin_spares += 1
                if leave.is_split:
                    split_conversions += 1
        else:
            opens += 1

        if frame.balls:
            ball1 = frame.balls[0]
            first_ball_total += ball1.pins_knocked_down
            first_ball_count += 1
            if ball1.is_gutter:
                gutters += 1
            if ball1.is_foul:
                fouls += 1

            if is_pocket_hit(ball1.pinset_before, ball1.pinset_after):
                pocket_hits += 1
                if frame.is_strike:
                    pocket_strikes += 1

            if not frame.is_strike and leave is not None:
                bucket = leaves[tuple(leave.pins)]
                bucket["count"] += 1
                if leave.is_converted:
                    bucket["conversions"] += 1
                if leave.is_split:
                    split_leaves += 1

        if len(frame.balls) > 1:
            ball2 = frame.balls[1]
            if ball2.is_gutter:
                gutters += 1
            if ball2.is_foul:
                fouls += 1

    doubles = triples = 0
    for i in range(len(regular) - 1):
        if regular[i].is_strike and regular[i + 1].is_strike:
            doubles += 1
            if i + 2 < len(regular) and regular[i + 2].is_strike:
                triples += 1

    common_leaves = [
        {
            "pinset": list(pins),
            "count": data["count"],
            "conversionRate": round1(_pct(data["conversions"], data["count"])),
        }
        for pins, data in leaves.items()
    ]
    # stable sort keeps first-seen order among equal counts
    common_leaves.sort(key=lambda entry: entry["count"], reverse=True)

    return {
        "playerId": games[0].player_id,
        "totalGames": len(games),
        "averageScore": round1(sum(scores) / len(scores)),
        "highGame": max(scores),
        "strikePercentage": round1(_pct(strikes, total_frames)),
        "sparePercentage": round1(_pct(spares, total_frames)),
        "singlePinSparePercentage": round1(_pct(single_pin_spares, spares)),
        "multiPinSparePercentage": round1(_pct(multi_pin_spares, spares)),
        "splitLeavesPercentage": round1(_pct(split_leaves, total_frames)),
        "splitConversionPercentage": round1(_pct(split_conversions, split_leaves)),
        "openFramesPercentage": round1(_pct(opens, total_frames)),
        "gutterCount": gutters,
        "foulCount": fouls,
        "firstBallAverage": round1(
            first_ball_total / first_ball_count if first_ball_count else 0.0
        ),
        "pocketHitPercentage": round1(_pct(pocket_hits, first_ball_count)),
        "carryRate": round1(_pct(pocket_strikes, pocket_hits)),
        "doublePercentage": round1(_pct(doubles, total_frames)),
        "triplePercentage": round1(_pct(triples, total_frames)),
        "commonLeaves": common_leaves[:leaves_limit],
    }


def calculate_session_stats(
    games: Iterable[Game], frames: Iterable[Frame], session_id: Optional[str]
) -> Dict:
    """Stats for the completed games of a single practice or match session."""
    session_games = [g for g in games if g.is_complete and g.session_id == session_id]
    return calculate_player_stats(session_games, frames_for_games(frames, session_games))


def calculate_team_stats(player_stats: Mapping[str, Mapping]) -> Dict[str, float]:
    """Unweighted mean of each player's averages, plus the best single game.

    This is a mean of means, not a pooled re-aggregation of frames.
    """
    stats = list(player_stats.values())
    if not stats:
        return {
            "averageScore": 0,
            "highGame": 0,
            "strikePercentage": 0,
            "sparePercentage": 0,
        }
    n = len(stats)
    return {
        "averageScore": round1(sum(s["averageScore"] for s in stats) / n),
        "highGame": max(s["highGame"] for s in stats),
        "strikePercentage": round1(sum(s["strikePercentage"] for s in stats) / n),
        "sparePercentage": round1(sum(s["sparePercentage"] for s in stats) / n),
    }


def recent_games(games: Iterable[Game], limit: int = STATS_GAME_LIMIT) -> List[Game]:
    """Most recent completed games, newest first."""
    if limit <= 0:
        raise ValueError("limit must be positive")
    completed = [g for g in games if g.is_complete]
    # undated games sort last
    completed.sort(
        key=lambda g: (g.created_at is not None, g.created_at or 0),
        reverse=True,
    )
    return completed[:limit]


def frames_for_games(frames: Iterable[Frame], games: Iterable[Game]) -> List[Frame]:
    """Frames whose ``game_id`` belongs to one of ``games``."""
    game_ids = {g.id for g in games}
    return [f for f in frames if f.game_id in game_ids]


def rolling_average(scores: Sequence[int], span: int) -> list[float]:
    """Return the rolling average of a sequence of game scores.

    Args:
        scores: Game scores, oldest first.
        span: Size of the rolling window.
    """
    if span <= 0:
        raise ValueError("span must be positive")
    total = 0
    window: deque[int] = deque()
    averages: list[float] = []
    for s in scores:
        window.append(s)
        total += s
        if len(window) > span:
            total -= window.popleft()
        averages.append(round1(total / len(window)))
    return averages


def pin_leave_frequency(common_leaves: Iterable[Mapping]) -> Dict[int, int]:
    """How often each pin was left standing, weighted by leave count."""
    frequency = {pin: 0 for pin in ALL_PINS}
    for leave in common_leaves:
        for pin in leave["pinset"]:
            frequency[pin] += leave["count"]
    return frequency


def summarize_team_games(games_by_player: Mapping[str, Sequence[Game]]) -> Dict:
    """Pooled totals for a roster: every game counts once.

    Args:
        games_by_player: mapping of player id to that player's games.
    Returns:
        dict with ``players``, ``totalGames``, ``averageScore`` and ``highGame``.
    """
    total_games = 0
    total_score = 0
    high_game = 0
    for games in games_by_player.values():
        total_games += len(games)
        total_score += sum(g.total_score for g in games)
        high_game = max([high_game] + [g.total_score for g in games])
    return {
        "players": len(games_by_player),
        "totalGames": total_games,
        "averageScore": round1(total_score / total_games) if total_games else 0,
        "highGame": high_game,
    }
