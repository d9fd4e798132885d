"""Shared fakes for the controller, flow and endpoint tests."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from chartspeak.sonification import StatusAnnouncer, Utterance  # noqa: E402


class FakeTimer:
    def __init__(self, seconds: float, callback: Callable[[], None]) -> None:
        self.seconds = seconds
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when `tick` is called."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    @property
    def active(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def call_every(self, seconds: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(seconds, callback)
        self.timers.append(timer)
        return timer

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            for timer in self.active:
                timer.callback()


class FakeTone:
    def __init__(self, frequency_hz: float) -> None:
        self.frequency_hz = frequency_hz
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeToneOutput:
    def __init__(self) -> None:
        self.tones: list[FakeTone] = []
        self.gains: list[float] = []

    @property
    def frequencies(self) -> list[float]:
        return [tone.frequency_hz for tone in self.tones]

    @property
    def sounding(self) -> list[FakeTone]:
        return [tone for tone in self.tones if not tone.stopped]

    def play(self, frequency_hz: float, duration: float) -> FakeTone:
        tone = FakeTone(frequency_hz)
        self.tones.append(tone)
        return tone

    def set_gain(self, gain: float) -> None:
        self.gains.append(gain)


class FakeSpeechEngine:
    """Single-voice engine; cancel interrupts the active utterance like a browser does."""

    def __init__(self) -> None:
        self.spoken: list[Utterance] = []
        self.calls: list[str] = []
        self.active: Utterance | None = None

    @property
    def last(self) -> Utterance:
        return self.spoken[-1]

    def speak(self, utterance: Utterance) -> None:
        self.calls.append("speak")
        self.spoken.append(utterance)
        self.active = utterance

    def pause(self) -> None:
        self.calls.append("pause")

    def resume(self) -> None:
        self.calls.append("resume")

    def cancel(self) -> None:
        self.calls.append("cancel")
        interrupted, self.active = self.active, None
        if interrupted is not None and interrupted.on_error:
            interrupted.on_error("interrupted")

    def finish(self, utterance: Utterance | None = None) -> None:
        target = utterance or self.last
        if target is self.active:
            self.active = None
        if target.on_end:
            target.on_end()

    def fail(self, reason: str = "synthesis-failed") -> None:
        if self.last.on_error:
            self.last.on_error(reason)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def tone_output() -> FakeToneOutput:
    return FakeToneOutput()


@pytest.fixture
def speech_engine() -> FakeSpeechEngine:
    return FakeSpeechEngine()


@pytest.fixture
def announcer() -> StatusAnnouncer:
    return StatusAnnouncer()
