"""Spare-shooting drills for practice sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..scoring.pins import describe_leave
from .stats import round1
from .validation import ValidationError


@dataclass(frozen=True)
class SpareDrill:
    id: str
    name: str
    pins: tuple[int, ...]
    difficulty: str

    @property
    def leave_type(self) -> str:
        return describe_leave(self.pins)


SPARE_DRILLS: list[SpareDrill] = [
    SpareDrill(id="10-pin", name="10 Pin", pins=(10,), difficulty="easy"),
    SpareDrill(id="7-pin", name="7 Pin", pins=(7,), difficulty="easy"),
    SpareDrill(id="4-pin", name="4 Pin", pins=(4,), difficulty="easy"),
    SpareDrill(id="6-pin", name="6 Pin", pins=(6,), difficulty="easy"),
    SpareDrill(id="3-6-9", name="3-6-9", pins=(3, 6, 9), difficulty="medium"),
    SpareDrill(id="2-7-8", name="2-7-8", pins=(2, 7, 8), difficulty="medium"),
    SpareDrill(id="4-7-8", name="4-7-8 (Bucket)", pins=(4, 7, 8), difficulty="medium"),
    SpareDrill(id="3-5-6", name="3-5-6 (Bucket)", pins=(3, 5, 6), difficulty="medium"),
    SpareDrill(id="3-6-10", name="3-6-10 Washout", pins=(3, 6, 10), difficulty="medium"),
    SpareDrill(id="2-7", name="2-7 Bucket", pins=(2, 7), difficulty="medium"),
    SpareDrill(id="3-10", name="3-10 Split", pins=(3, 10), difficulty="hard"),
    SpareDrill(id="7-10", name="7-10 Split", pins=(7, 10), difficulty="hard"),
    SpareDrill(id="4-6", name="4-6 Split", pins=(4, 6), difficulty="hard"),
    SpareDrill(id="5-7", name="5-7 Split", pins=(5, 7), difficulty="hard"),
    SpareDrill(id="5-10", name="5-10 Split", pins=(5, 10), difficulty="hard"),
    SpareDrill(id="4-6-7-10", name="Big Four", pins=(4, 6, 7, 10), difficulty="hard"),
]

_DRILLS_BY_ID = {drill.id: drill for drill in SPARE_DRILLS}


def get_drill(drill_id: str) -> SpareDrill:
    drill = _DRILLS_BY_ID.get(drill_id)
    if drill is None:
        raise ValidationError(f"Unknown spare drill {drill_id!r}.")
    return drill


def is_drill_converted(drill: SpareDrill, standing: Iterable[int]) -> bool:
    """True when none of the drill's pins are left standing."""
    remaining = set(standing)
    return all(pin not in remaining for pin in drill.pins)


def score_spare_session(
    drill: SpareDrill, attempts: Iterable[Sequence[int]]
) -> dict:
    """Tally a run of attempts at one drill.

    Args:
        drill: the drill being practised.
        attempts: for each shot, the pins left standing afterwards.
    """
    total = conversions = 0
    for standing in attempts:
        total += 1
        if is_drill_converted(drill, standing):
            conversions += 1
    return {
        "drillId": drill.id,
        "attempts": total,
        "conversions": conversions,
        "conversionRate": round1(conversions / total * 100) if total else 0.0,
    }
