"""Pin-leave classification for ten-pin bowling.

Pins are numbered 1-10 on the standard triangular rack::

    7   8   9   10
      4   5   6
        2   3
          1
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

ALL_PINS: Tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)

# Common USBC splits. The real definition is geometric; only these exact
# leaves are recognised.
SPLIT_PATTERNS: frozenset[Tuple[int, ...]] = frozenset(
    {
        (7, 10),
        (4, 6),
        (5, 7),
        (5, 10),
        (4, 7, 10),
        (6, 7, 10),
        (4, 6, 7),
        (4, 6, 10),
        (4, 7, 9),
        (5, 6),
        (2, 7),
        (3, 10),
        (4, 6, 7, 9, 10),
        (4, 6, 7, 10),
        (4, 7, 9, 10),
        (6, 7, 9, 10),
    }
)

WASHOUT_PATTERNS: frozenset[Tuple[int, ...]] = frozenset(
    {
        (1, 2, 4, 10),
        (1, 3, 6, 7),
        (1, 2, 10),
        (1, 3, 7),
    }
)

FAMOUS_LEAVES = {
    "7-10": "7-10 Split",
    "4-6": "4-6 Split",
    "4-6-7-10": "Big Four",
}


@dataclass(frozen=True)
class PinLeave:
    """Pins left standing after the first ball of a frame."""

    pins: Tuple[int, ...]
    count: int
    is_split: bool
    is_washout: bool
    is_converted: bool
    leave_type: str


def _sorted(pins: Iterable[int]) -> Tuple[int, ...]:
    return tuple(sorted(pins))


def leave_key(pins: Iterable[int]) -> str:
    """Hyphen-joined sorted pins, e.g. ``"4-7-10"``."""
    return "-".join(str(p) for p in _sorted(pins))


def is_split(pins: Iterable[int]) -> bool:
    standing = _sorted(pins)
    if len(standing) < 2:
        return False
    if 1 in standing:
        return False
    return standing in SPLIT_PATTERNS


def is_washout(pins: Iterable[int]) -> bool:
    return _sorted(pins) in WASHOUT_PATTERNS


def describe_leave(pins: Iterable[int]) -> str:
    standing = _sorted(pins)
    if not standing:
        return "Strike"
    if len(standing) == 10:
        return "Gutter"
    if len(standing) == 1:
        return f"{standing[0]}-pin"

    key = leave_key(standing)
    if key in FAMOUS_LEAVES:
        return FAMOUS_LEAVES[key]
    if is_split(standing):
        return f"{key} Split"
    if is_washout(standing):
        return f"{key} Washout"
    return key


def knocked_down(pinset_before: Iterable[int], pinset_after: Iterable[int]) -> Tuple[int, ...]:
    """Pins that were standing before a ball and are gone after it."""
    after = set(pinset_after)
    return tuple(p for p in pinset_before if p not in after)


def is_pocket_hit(pinset_before: Iterable[int], pinset_after: Iterable[int]) -> bool:
    """Headpin plus the 2 or 3 pin knocked down on the same ball.

    This is an approximation that ignores handedness, not a pocket model.
    """
    knocked = set(knocked_down(pinset_before, pinset_after))
    return 1 in knocked and (2 in knocked or 3 in knocked)


def create_pin_leave(pins_standing: Iterable[int], was_converted: bool) -> PinLeave:
    standing = _sorted(pins_standing)
    return PinLeave(
        pins=standing,
        count=len(standing),
        is_split=is_split(standing),
        is_washout=is_washout(standing),
        is_converted=was_converted,
        leave_type=describe_leave(standing),
    )
