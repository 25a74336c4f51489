import logging

from fastapi import APIRouter

from ..config import ROLLING_AVERAGE_SPAN, STATS_GAME_LIMIT
from ..schemas import (
    DashboardOut,
    GameSummaryOut,
    PlayerStatsOut,
    PlayerStatsRequest,
    SessionStatsRequest,
    TeamGamesOut,
    TeamStatsOut,
    TeamStatsRequest,
)
from ..services.stats import (
    calculate_player_stats,
    calculate_session_stats,
    calculate_team_stats,
    frames_for_games,
    pin_leave_frequency,
    recent_games,
    rolling_average,
    summarize_team_games,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["stats"])


def _windowed_stats(body: PlayerStatsRequest):
    games = recent_games(
        [g.to_game() for g in body.games], body.limit or STATS_GAME_LIMIT
    )
    frames = frames_for_games([f.to_frame() for f in body.frames], games)
    logger.debug(
        "Stats window: %d of %d games, %d frames",
        len(games),
        len(body.games),
        len(frames),
    )
    return games, calculate_player_stats(games, frames)


# POST /api/stats/player
@router.post("/player", response_model=PlayerStatsOut)
def player_stats(body: PlayerStatsRequest) -> PlayerStatsOut:
    _, stats = _windowed_stats(body)
    return PlayerStatsOut(**stats)


# POST /api/stats/team
@router.post("/team", response_model=TeamStatsOut)
def team_stats(body: TeamStatsRequest) -> TeamStatsOut:
    stats = calculate_team_stats(
        {pid: s.model_dump() for pid, s in body.players.items()}
    )
    pooled = None
    if body.games:
        pooled = TeamGamesOut(
            **summarize_team_games(
                {
                    pid: [g.to_game() for g in games if g.isComplete]
                    for pid, games in body.games.items()
                }
            )
        )
    return TeamStatsOut(**stats, pooled=pooled)


# POST /api/stats/session
@router.post("/session", response_model=PlayerStatsOut)
def session_stats(body: SessionStatsRequest) -> PlayerStatsOut:
    stats = calculate_session_stats(
        [g.to_game() for g in body.games],
        [f.to_frame() for f in body.frames],
        body.sessionId,
    )
    return PlayerStatsOut(**stats)


# POST /api/stats/dashboard
@router.post("/dashboard", response_model=DashboardOut)
def dashboard(body: PlayerStatsRequest) -> DashboardOut:
    games, stats = _windowed_stats(body)
    # trend reads oldest to newest
    scores = [g.total_score for g in reversed(games)]
    return DashboardOut(
        stats=PlayerStatsOut(**stats),
        games=[
            GameSummaryOut(id=g.id, score=g.total_score, mode=g.mode, date=g.created_at)
            for g in games
        ],
        rollingAverage=rolling_average(scores, ROLLING_AVERAGE_SPAN),
        pinFrequency=pin_leave_frequency(stats["commonLeaves"]),
    )
