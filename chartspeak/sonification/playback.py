"""Autoplay and navigation controller for the sonified demonstration chart.

Every change of `current_index`, whether it comes from the autoplay timer, a
direct seek or arrow-key navigation, is funnelled through `_select`, which
stops the previous tone, starts exactly one new tone and emits exactly one
announcement.
"""

from __future__ import annotations

import logging
from typing import Sequence

from chartspeak.config.settings import settings

from .announcer import StatusAnnouncer
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .tones import RenderedToneOutput, ToneHandle, ToneOutput, frequency, rounded_hertz, volume_to_gain
from .types import DEMO_POINTS, DataPoint, PlaybackState

logger = logging.getLogger(__name__)


def describe_point(point: DataPoint) -> str:
    return (
        f"{point.label}: {point.value} percent. "
        f"Frequency: {rounded_hertz(point.value)} hertz."
    )


class PlaybackController:
    """Own the autoplay timer, the current index and the active tone."""

    def __init__(
        self,
        points: Sequence[DataPoint] = DEMO_POINTS,
        *,
        output: ToneOutput | None = None,
        scheduler: Scheduler | None = None,
        announcer: StatusAnnouncer | None = None,
        interval: float = settings.sonification.autoplay_interval_seconds,
        tone_duration: float = settings.sonification.tone_duration_seconds,
        volume: int = settings.sonification.default_volume,
    ) -> None:
        if not points:
            raise ValueError("PlaybackController needs at least one data point")
        self._points = tuple(points)
        self._output = output or RenderedToneOutput()
        self._scheduler = scheduler or AsyncioScheduler()
        self.announcer = announcer or StatusAnnouncer()
        self._interval = interval
        self._tone_duration = tone_duration
        self._timer: TimerHandle | None = None
        self._tone: ToneHandle | None = None
        self.state = PlaybackState(volume=max(0, min(100, volume)))
        self._apply_gain()

    @property
    def points(self) -> tuple[DataPoint, ...]:
        return self._points

    @property
    def current_point(self) -> DataPoint:
        return self._points[self.state.current_index]

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    # Playback -----------------------------------------------------------

    def toggle(self) -> None:
        if self.state.is_playing:
            self.pause()
        else:
            self.play()

    def play(self) -> None:
        if self.state.is_playing and self._timer is not None:
            return
        self._cancel_timer()
        self._timer = self._scheduler.call_every(self._interval, self._advance)
        self.state.is_playing = True
        self.announcer.announce("Playing chart audio. Each data point will play in sequence.")
        logger.debug("Autoplay started interval=%.3fs", self._interval)

    def pause(self) -> None:
        if not self.state.is_playing:
            return
        self._cancel_timer()
        self.state.is_playing = False
        self.announcer.announce("Playback paused")

    def reset(self) -> None:
        self._cancel_timer()
        self._stop_tone()
        self.state.is_playing = False
        self.state.current_index = 0
        self.announcer.announce("Playback reset to beginning")

    def _advance(self) -> None:
        self._select((self.state.current_index + 1) % len(self._points))

    # Navigation ---------------------------------------------------------

    def seek(self, index: int) -> DataPoint:
        """Jump straight to a point, as a click or focus on its bar does."""

        return self._select(self._clamp(index))

    def step(self, delta: int) -> DataPoint:
        """Move relative to the current point without wrapping around."""

        return self._select(self._clamp(self.state.current_index + delta))

    def next(self) -> DataPoint:
        return self.step(1)

    def previous(self) -> DataPoint:
        return self.step(-1)

    def handle_key(self, key: str) -> bool:
        if key == "ArrowRight":
            self.next()
        elif key == "ArrowLeft":
            self.previous()
        elif key == " ":
            self.toggle()
        else:
            return False
        return True

    def _clamp(self, index: int) -> int:
        return max(0, min(len(self._points) - 1, index))

    def _select(self, index: int) -> DataPoint:
        self.state.current_index = index
        point = self._points[index]
        self._stop_tone()
        self._tone = self._output.play(frequency(point.value), self._tone_duration)
        self.announcer.announce(describe_point(point))
        return point

    # Volume -------------------------------------------------------------

    def set_volume(self, volume: int) -> None:
        self.state.volume = max(0, min(100, int(volume)))
        self._apply_gain()

    def set_muted(self, muted: bool) -> None:
        self.state.is_muted = bool(muted)
        self._apply_gain()

    def toggle_mute(self) -> None:
        self.set_muted(not self.state.is_muted)

    def _apply_gain(self) -> None:
        self._output.set_gain(volume_to_gain(self.state.volume, self.state.is_muted))

    # Teardown -----------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _stop_tone(self) -> None:
        if self._tone is not None:
            self._tone.stop()
            self._tone = None

    def close(self) -> None:
        """Cancel autoplay and silence the active tone."""

        self._cancel_timer()
        self._stop_tone()
        self.state.is_playing = False

    def __enter__(self) -> "PlaybackController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["PlaybackController", "describe_point"]
