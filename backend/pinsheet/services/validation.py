from typing import Any, Dict, List, Sequence

from ..scoring.bowling import BAKER_TEAM_SIZE, LAST_FRAME, Frame, GameState
from ..scoring.pins import ALL_PINS


class ValidationError(Exception):
    """Raised when submitted bowling input is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


EVENT_TYPES = ("ROLL", "STRIKE", "SPARE", "MISS", "UNDO")


def validate_pins(pins: Sequence[Any], *, label: str = "Pins") -> List[int]:
    """Validate a collection of pin numbers and return them sorted.

    Rules:
    - Must be a sequence (not a string)
    - Every entry is an integer 1-10 (booleans are rejected)
    - No pin appears twice
    """
    if not isinstance(pins, Sequence) or isinstance(pins, (str, bytes)):
        raise ValidationError(f"{label} must be provided as a list of pin numbers.")

    normalized: List[int] = []
    for raw in pins:
        # Reject booleans explicitly (bool is a subclass of int in Python)
        if isinstance(raw, bool):
            raise ValidationError(f"{label} must be integers (not booleans).")
        try:
            pin = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"{label} must be integers.")
        if not 1 <= pin <= 10:
            raise ValidationError(f"Pin {pin} is out of range; pins are numbered 1-10.")
        if pin in normalized:
            raise ValidationError(f"Pin {pin} is listed more than once.")
        normalized.append(pin)

    return sorted(normalized)


def validate_event(event: Dict[str, Any], state: GameState) -> None:
    """Check that ``event`` is legal for the game in ``state``.

    The scoring engine trusts its input; anything it should never see is
    rejected here.
    """
    kind = event.get("type")
    if kind not in EVENT_TYPES:
        raise ValidationError(f"Unknown bowling event {kind!r}.")

    if kind == "UNDO":
        if not state.can_undo:
            raise ValidationError("There is no ball to undo.")
        return

    if state.complete:
        raise ValidationError("Game is already complete.")

    fresh_rack = tuple(state.pins_standing) == ALL_PINS
    if kind == "STRIKE" and not fresh_rack:
        raise ValidationError("A strike can only be recorded on a full rack.")
    if kind == "SPARE" and (state.current_ball == 1 or fresh_rack):
        raise ValidationError(
            "A spare can only be recorded after the first ball of a frame."
        )
    if kind == "ROLL":
        standing = validate_pins(event.get("standing") or [], label="Standing pins")
        not_standing = [p for p in standing if p not in state.pins_standing]
        if not_standing:
            formatted = ", ".join(str(p) for p in not_standing)
            raise ValidationError(f"Pins {formatted} are not currently standing.")


def validate_frames(frames: Sequence[Frame]) -> None:
    """Validate already-recorded frames submitted for scoring.

    Rules:
    - At most ten frames, numbered 1..n in order
    - Frames 1-9 hold at most 2 balls, frame 10 at most 3
    - Each ball credits 0-10 pins
    """
    if len(frames) > LAST_FRAME:
        raise ValidationError(f"A game has at most {LAST_FRAME} frames.")
    for expected, frame in enumerate(frames, start=1):
        if frame.frame_number != expected:
            raise ValidationError(
                f"Frame #{expected} is numbered {frame.frame_number}; frames must be consecutive from 1."
            )
        max_balls = 3 if frame.frame_number == LAST_FRAME else 2
        if len(frame.balls) > max_balls:
            raise ValidationError(
                f"Frame #{expected} has {len(frame.balls)} balls; at most {max_balls} allowed."
            )
        for ball in frame.balls:
            if not 0 <= ball.pins_knocked_down <= 10:
                raise ValidationError(f"Frame #{expected} has a ball outside 0-10 pins.")


def validate_baker_lineup(player_ids: Sequence[Any]) -> List[str]:
    """Baker games need exactly five distinct bowlers."""
    if not isinstance(player_ids, Sequence) or isinstance(player_ids, (str, bytes)):
        raise ValidationError("Player ids must be provided as a list.")
    normalized: List[str] = []
    for index, raw in enumerate(player_ids, start=1):
        if not isinstance(raw, str) or not raw.strip():
            raise ValidationError(f"Player #{index} must be a non-empty id.")
        normalized.append(raw.strip())
    if len(normalized) != BAKER_TEAM_SIZE:
        raise ValidationError(
            f"Baker matches require exactly {BAKER_TEAM_SIZE} players (got {len(normalized)})."
        )
    if len(set(normalized)) != len(normalized):
        raise ValidationError("Baker lineup lists the same player twice.")
    return normalized
