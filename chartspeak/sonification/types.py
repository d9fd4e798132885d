"""Typed containers shared by the sonification controllers.

They live in their own module so `tones`, `playback` and `speech` can import
them without creating circular dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class DataPoint:
    """One bar of the demonstration chart."""

    index: int
    value: int
    label: str


_MONTHLY_VALUES = (
    ("January", 25),
    ("February", 42),
    ("March", 38),
    ("April", 55),
    ("May", 67),
    ("June", 78),
    ("July", 72),
    ("August", 85),
    ("September", 91),
    ("October", 88),
    ("November", 95),
    ("December", 100),
)

DEMO_POINTS: tuple[DataPoint, ...] = tuple(
    DataPoint(index=idx, value=value, label=label)
    for idx, (label, value) in enumerate(_MONTHLY_VALUES)
)
"""Fixed monthly performance data; sequence order drives navigation."""


@dataclass
class PlaybackState:
    is_playing: bool = False
    current_index: int = 0
    is_muted: bool = False
    volume: int = 80


class SpeechStatus(str, Enum):
    IDLE = "idle"
    SPEAKING = "speaking"
    PAUSED = "paused"


@dataclass
class SpeechState:
    status: SpeechStatus = SpeechStatus.IDLE
    message_index: int = 0
    muted: bool = False


__all__ = [
    "DEMO_POINTS",
    "DataPoint",
    "PlaybackState",
    "SpeechState",
    "SpeechStatus",
]
