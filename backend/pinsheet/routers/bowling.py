import logging
from typing import List, Sequence

from fastapi import APIRouter, Query

from ..exceptions import InvalidBowlingEvent, http_problem
from ..scoring import bowling as engine
from ..scoring.bowling import PENDING, Frame, FrameScore
from ..scoring.pins import create_pin_leave
from ..schemas import (
    BallOut,
    EventsRequest,
    FrameOut,
    LiveGameOut,
    PinLeaveOut,
    ScoreOut,
    ScoreRequest,
)
from ..services.validation import (
    ValidationError,
    validate_baker_lineup,
    validate_event,
    validate_frames,
    validate_pins,
)

logger = logging.getLogger(__name__)

# Resource-only prefix; API_PREFIX is added by main
router = APIRouter(prefix="/bowling", tags=["bowling"])


def _frames_out(frames: Sequence[Frame]) -> List[FrameOut]:
    totals = engine.calculate_running_totals(frames)
    out: List[FrameOut] = []
    for index, frame in enumerate(frames):
        score: FrameScore = engine.calculate_frame_score(frames, index)
        total = totals[index]
        out.append(
            FrameOut(
                frameNumber=frame.frame_number,
                playerId=frame.player_id,
                balls=[
                    BallOut(
                        ballNumber=b.ball_number,
                        pinsKnockedDown=b.pins_knocked_down,
                        pinsetBefore=list(b.pinset_before),
                        pinsetAfter=list(b.pinset_after),
                        isFoul=b.is_foul,
                        isGutter=b.is_gutter,
                    )
                    for b in frame.balls
                ],
                isStrike=frame.is_strike,
                isSpare=frame.is_spare,
                leaveAfterBall1=(
                    PinLeaveOut.from_leave(frame.leave) if frame.leave else None
                ),
                symbols=engine.get_frame_symbols(frame, frame.frame_number),
                score=None if score is PENDING else score,
                runningTotal=None if total is PENDING else total,
                pending=score is PENDING,
            )
        )
    return out


# POST /api/bowling/score
@router.post("/score", response_model=ScoreOut)
def score_frames(body: ScoreRequest) -> ScoreOut:
    frames = [f.to_frame() for f in body.frames]
    try:
        validate_frames(frames)
    except ValidationError as exc:
        raise http_problem(
            status_code=422,
            detail=str(exc),
            code="bowling_frames_invalid",
        )
    return ScoreOut(
        frames=_frames_out(frames),
        total=engine.final_score(frames),
        complete=engine.is_game_complete(frames),
    )


# POST /api/bowling/events
@router.post("/events", response_model=LiveGameOut)
def replay_events(body: EventsRequest) -> LiveGameOut:
    """Replay a game's ball events and return where play stands."""
    config = body.config.model_dump()
    if body.config.mode == "match-baker":
        try:
            config["playerIds"] = validate_baker_lineup(body.config.playerIds)
        except ValidationError as exc:
            raise http_problem(
                status_code=422,
                detail=str(exc),
                code="baker_invalid_lineup",
            )
    state = engine.init_state(config)
    for number, ev in enumerate(body.events, start=1):
        payload = ev.model_dump()
        try:
            validate_event(payload, state)
        except ValidationError as exc:
            raise InvalidBowlingEvent(number, exc.detail)
        state = engine.apply(payload, state)
    logger.debug(
        "Replayed %d events for game %s (frame %d, ball %d)",
        len(body.events),
        state.game_id,
        state.current_frame,
        state.current_ball,
    )
    result = engine.summary(state)
    return LiveGameOut(
        gameId=result["gameId"],
        mode=result["mode"],
        frames=_frames_out(result["frames"]),
        total=result["total"],
        complete=result["complete"],
        currentFrame=result["currentFrame"],
        currentBall=result["currentBall"],
        pinsStanding=result["pinsStanding"],
        canUndo=result["canUndo"],
    )


# GET /api/bowling/leaves?pins=7&pins=10
@router.get("/leaves", response_model=PinLeaveOut)
def describe_leave(
    pins: List[int] = Query(default=[], description="Pins left standing"),
) -> PinLeaveOut:
    try:
        standing = validate_pins(pins)
    except ValidationError as exc:
        raise http_problem(
            status_code=422,
            detail=str(exc),
            code="bowling_pins_invalid",
        )
    return PinLeaveOut.from_leave(create_pin_leave(standing, False))
