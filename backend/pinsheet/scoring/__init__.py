"""Bowling scoring engine: pin leaves, frame scoring and live play."""

from . import bowling, pins

__all__ = [
    "bowling",
    "pins",
]
