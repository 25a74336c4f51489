"""Ten-pin bowling scoring engine.

Frame scores resolve strike and spare bonuses by looking ahead at later
balls. A score that still needs bonus balls is ``PENDING``, which is not a
number and cannot be added to one.

Live scoring follows the same ``init_state`` / ``apply`` / ``summary``
contract as the other sport engines, except that states are immutable and
``apply`` returns a new ``GameState``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .pins import ALL_PINS, PinLeave, create_pin_leave

LAST_FRAME = 10
BAKER_TEAM_SIZE = 5


class Pending(Enum):
    """Marker for a score that cannot be resolved yet."""

    PENDING = "pending"

    def __repr__(self) -> str:
        return "PENDING"


PENDING = Pending.PENDING

FrameScore = Union[int, Pending]
Symbol = Union[str, int]


@dataclass(frozen=True)
class Ball:
    ball_number: int
    pins_knocked_down: int
    pinset_before: Tuple[int, ...]
    pinset_after: Tuple[int, ...]
    is_foul: bool = False
    is_gutter: bool = False
    timestamp: Optional[datetime] = field(default=None, compare=False)


@dataclass(frozen=True)
class Frame:
    frame_number: int
    balls: Tuple[Ball, ...] = ()
    is_strike: bool = False
    is_spare: bool = False
    leave: Optional[PinLeave] = None
    player_id: Optional[str] = None
    game_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "balls", tuple(self.balls))

    def pins(self, index: int) -> Optional[int]:
        """Pins credited to ball ``index`` (0-based), or ``None`` if not thrown."""
        if index < len(self.balls):
            return self.balls[index].pins_knocked_down
        return None


@dataclass(frozen=True)
class Game:
    id: str
    player_id: str
    total_score: int
    is_complete: bool = True
    mode: Optional[str] = None
    session_id: Optional[str] = None
    created_at: Optional[datetime] = None


def make_ball(
    ball_number: int,
    pinset_before: Iterable[int],
    pinset_after: Iterable[int],
    *,
    is_foul: bool = False,
    is_gutter: bool = False,
    timestamp: Optional[datetime] = None,
) -> Ball:
    """Build a ball from the pins standing before and after it.

    Fouls and gutter balls leave the rack untouched, and a foul is credited
    with no pins.
    """
    before = tuple(sorted(pinset_before))
    after = before if (is_foul or is_gutter) else tuple(sorted(pinset_after))
    return Ball(
        ball_number=ball_number,
        pins_knocked_down=0 if is_foul else len(before) - len(after),
        pinset_before=before,
        pinset_after=after,
        is_foul=is_foul,
        is_gutter=is_gutter,
        timestamp=timestamp,
    )


def derive_frame(frame: Frame) -> Frame:
    """Recompute the strike/spare flags and ball-1 leave from the balls."""
    balls = frame.balls
    if not balls:
        return replace(frame, is_strike=False, is_spare=False, leave=None)
    first = balls[0].pins_knocked_down
    is_strike = first == 10
    is_spare = (
        not is_strike
        and len(balls) >= 2
        and first + balls[1].pins_knocked_down == 10
    )
    leave = None if is_strike else create_pin_leave(balls[0].pinset_after, is_spare)
    return replace(frame, is_strike=is_strike, is_spare=is_spare, leave=leave)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def _frame_at(frames: Sequence[Frame], index: int) -> Optional[Frame]:
    return frames[index] if index < len(frames) else None


def calculate_frame_score(frames: Sequence[Frame], frame_index: int) -> FrameScore:
    frame = frames[frame_index]
    if frame.frame_number == LAST_FRAME:
        return sum(b.pins_knocked_down for b in frame.balls)

    if frame.is_strike:
        nxt = _frame_at(frames, frame_index + 1)
        if nxt is None:
            return PENDING
        bonus1 = nxt.pins(0)
        if bonus1 is None:
            return PENDING
        if nxt.is_strike and nxt.frame_number != LAST_FRAME:
            after = _frame_at(frames, frame_index + 2)
            if after is None:
                return PENDING
            bonus2 = after.pins(0)
        else:
            bonus2 = nxt.pins(1)
        if bonus2 is None:
            return PENDING
        return 10 + bonus1 + bonus2

    if frame.is_spare:
        nxt = _frame_at(frames, frame_index + 1)
        bonus = nxt.pins(0) if nxt is not None else None
        if bonus is None:
            return PENDING
        return 10 + bonus

    return (frame.pins(0) or 0) + (frame.pins(1) or 0)


def calculate_running_totals(frames: Sequence[Frame]) -> List[FrameScore]:
    """Cumulative score per frame; pending frames are skipped, not fatal."""
    totals: List[FrameScore] = []
    running = 0
    for index in range(len(frames)):
        score = calculate_frame_score(frames, index)
        if score is PENDING:
            totals.append(PENDING)
            continue
        running += score
        totals.append(running)
    return totals


def final_score(frames: Sequence[Frame]) -> int:
    """Last resolved running total, 0 when nothing is resolved yet."""
    for total in reversed(calculate_running_totals(frames)):
        if total is not PENDING:
            return total
    return 0


def get_frame_symbols(frame: Frame, frame_number: int) -> List[Symbol]:
    symbols: List[Symbol] = []

    if frame_number == LAST_FRAME:
        for ball in frame.balls:
            pins = ball.pins_knocked_down
            if ball.is_foul:
                symbols.append("F")
            elif ball.is_gutter:
                symbols.append("G")
            elif pins == 10:
                symbols.append("X")
            elif pins == 0:
                symbols.append("-")
            else:
                previous = frame.balls[len(symbols) - 1] if symbols else None
                if previous is not None and previous.pins_knocked_down + pins == 10:
                    symbols.append("/")
                else:
                    symbols.append(pins)
        return symbols

    if not frame.balls:
        return symbols
    ball1 = frame.balls[0]
    if ball1.is_foul:
        symbols.append("F")
    elif ball1.is_gutter or ball1.pins_knocked_down == 0:
        symbols.append("-")
    elif frame.is_strike:
        symbols.append("X")
        return symbols
    else:
        symbols.append(ball1.pins_knocked_down)

    if len(frame.balls) < 2:
        return symbols
    ball2 = frame.balls[1]
    if ball2.is_foul:
        symbols.append("F")
    elif frame.is_spare:
        symbols.append("/")
    elif ball2.is_gutter or ball2.pins_knocked_down == 0:
        symbols.append("-")
    else:
        symbols.append(ball2.pins_knocked_down)
    return symbols


def is_game_complete(frames: Sequence[Frame]) -> bool:
    if len(frames) != LAST_FRAME:
        return False
    for frame in frames[:-1]:
        expected = 1 if frame.is_strike else 2
        if len(frame.balls) != expected:
            return False
    tenth = frames[-1]
    expected = 3 if (tenth.is_strike or tenth.is_spare) else 2
    return len(tenth.balls) == expected


def generate_baker_rotation(player_ids: Sequence[str]) -> Dict[int, Optional[str]]:
    """Map frames 1-10 to the five Baker bowlers, wrapping at frame 6.

    Slots without a bowler (fewer than five ids supplied) map to ``None``.
    """
    rotation: Dict[int, Optional[str]] = {}
    for frame_number in range(1, LAST_FRAME + 1):
        index = (frame_number - 1) % BAKER_TEAM_SIZE
        rotation[frame_number] = player_ids[index] if index < len(player_ids) else None
    return rotation


# ---------------------------------------------------------------------------
# Live scoring
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameState:
    frames: Tuple[Frame, ...]
    current_frame: int = 1
    current_ball: int = 1
    pins_standing: Tuple[int, ...] = ALL_PINS
    complete: bool = False
    game_id: Optional[str] = None
    mode: Optional[str] = None
    rotation: Tuple[Optional[str], ...] = (None,) * LAST_FRAME

    @property
    def can_undo(self) -> bool:
        return _last_bowled_index(self.frames) is not None


def _new_frame(state: GameState, frame_number: int) -> Frame:
    return Frame(
        frame_number=frame_number,
        player_id=state.rotation[frame_number - 1],
        game_id=state.game_id,
    )


def init_state(config: Dict) -> GameState:
    """Start a game. Baker games take their frame rotation from ``playerIds``."""
    if config.get("mode") == "match-baker":
        mapping = generate_baker_rotation(config.get("playerIds") or [])
        rotation = tuple(mapping[n] for n in range(1, LAST_FRAME + 1))
    else:
        rotation = (config.get("playerId"),) * LAST_FRAME
    state = GameState(
        frames=(),
        game_id=config.get("gameId"),
        mode=config.get("mode"),
        rotation=rotation,
    )
    return replace(state, frames=(_new_frame(state, 1),))


def _last_bowled_index(frames: Sequence[Frame]) -> Optional[int]:
    for index in range(len(frames) - 1, -1, -1):
        if frames[index].balls:
            return index
    return None


def _settle(state: GameState, index: int) -> GameState:
    """Place the cursor right after the last ball recorded in ``frames[index]``.

    Any frames after ``index`` are discarded.
    """
    frame = state.frames[index]
    balls = frame.balls
    base = replace(
        state,
        frames=state.frames[: index + 1],
        current_frame=frame.frame_number,
        complete=False,
    )
    if not balls:
        return replace(base, current_ball=1, pins_standing=ALL_PINS)
    last = balls[-1]

    if frame.frame_number < LAST_FRAME:
        if frame.is_strike or len(balls) == 2:
            return replace(
                base,
                frames=base.frames + (_new_frame(base, frame.frame_number + 1),),
                current_frame=frame.frame_number + 1,
                current_ball=1,
                pins_standing=ALL_PINS,
            )
        return replace(base, current_ball=2, pins_standing=last.pinset_after)

    first = balls[0].pins_knocked_down
    if len(balls) == 1:
        pins = ALL_PINS if first == 10 else last.pinset_after
        return replace(base, current_ball=2, pins_standing=pins)
    if len(balls) == 2:
        second = balls[1].pins_knocked_down
        if first == 10 or first + second == 10:
            # fresh rack after strike-strike or a spare, else the leave carries
            fresh = second == 10 if first == 10 else True
            pins = ALL_PINS if fresh else last.pinset_after
            return replace(base, current_ball=3, pins_standing=pins)
    return replace(
        base,
        current_ball=len(balls),
        pins_standing=last.pinset_after,
        complete=True,
    )


def record_ball(
    state: GameState,
    standing: Iterable[int],
    *,
    is_foul: bool = False,
    is_gutter: bool = False,
    timestamp: Optional[datetime] = None,
) -> GameState:
    """Record the next ball, given the pins left standing after it."""
    if state.complete:
        return state
    index = state.current_frame - 1
    ball = make_ball(
        state.current_ball,
        state.pins_standing,
        standing,
        is_foul=is_foul,
        is_gutter=is_gutter,
        timestamp=timestamp,
    )
    frame = state.frames[index]
    frame = derive_frame(replace(frame, balls=frame.balls + (ball,)))
    frames = state.frames[:index] + (frame,) + state.frames[index + 1 :]
    return _settle(replace(state, frames=frames), index)


def undo(state: GameState) -> GameState:
    """Remove the most recent ball of the game and rewind the cursor."""
    index = _last_bowled_index(state.frames)
    if index is None:
        return state
    frame = state.frames[index]
    frame = derive_frame(replace(frame, balls=frame.balls[:-1]))
    frames = state.frames[:index] + (frame,)
    return _settle(replace(state, frames=frames), index)


def apply(event: Dict, state: GameState) -> GameState:
    kind = event.get("type")
    if kind == "UNDO":
        return undo(state)
    timestamp = event.get("timestamp")
    if kind == "ROLL":
        return record_ball(
            state,
            event.get("standing") or (),
            is_foul=bool(event.get("foul")),
            is_gutter=bool(event.get("gutter")),
            timestamp=timestamp,
        )
    if kind in ("STRIKE", "SPARE"):
        return record_ball(state, (), timestamp=timestamp)
    if kind == "MISS":
        return record_ball(state, state.pins_standing, timestamp=timestamp)
    raise ValueError("invalid bowling event")


def summary(state: GameState) -> Dict:
    frames = list(state.frames)
    return {
        "gameId": state.game_id,
        "mode": state.mode,
        "frames": frames,
        "symbols": [get_frame_symbols(f, f.frame_number) for f in frames],
        "scores": [calculate_frame_score(frames, i) for i in range(len(frames))],
        "runningTotals": calculate_running_totals(frames),
        "total": final_score(frames),
        "complete": state.complete,
        "currentFrame": state.current_frame,
        "currentBall": state.current_ball,
        "pinsStanding": list(state.pins_standing),
        "canUndo": state.can_undo,
    }
