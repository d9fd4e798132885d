"""Text-to-speech playback state machine.

The speech engine itself is external (a browser `speechSynthesis` or any other
synthesizer implementing `SpeechEngine`); this controller only decides when to
speak, pause, resume or cancel, and keeps a single live utterance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from chartspeak.utils import strip_markup

from .announcer import StatusAnnouncer
from .types import SpeechState, SpeechStatus

logger = logging.getLogger(__name__)

SPEECH_RATE = 0.9
SPEECH_PITCH = 1.0


@dataclass
class Utterance:
    text: str
    rate: float = SPEECH_RATE
    pitch: float = SPEECH_PITCH
    volume: float = 1.0
    on_end: Optional[Callable[[], None]] = field(default=None, repr=False)
    on_error: Optional[Callable[[str], None]] = field(default=None, repr=False)


class SpeechEngine(Protocol):
    def speak(self, utterance: Utterance) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def cancel(self) -> None: ...


class SpeechController:
    """Drive a `SpeechEngine` with at most one active utterance."""

    def __init__(
        self,
        engine: SpeechEngine,
        *,
        announcer: StatusAnnouncer | None = None,
    ) -> None:
        self._engine = engine
        self.announcer = announcer or StatusAnnouncer()
        self.state = SpeechState()
        self._utterance: Utterance | None = None

    @property
    def status(self) -> SpeechStatus:
        return self.state.status

    @property
    def utterance(self) -> Utterance | None:
        return self._utterance

    def play(self, text: str) -> None:
        if self.state.status is SpeechStatus.SPEAKING:
            return
        if self.state.status is SpeechStatus.PAUSED:
            self.resume()
            return
        self._start(text)

    def speak(self, text: str) -> None:
        """Read `text` aloud now, preempting whatever is being spoken."""

        self._start(text)

    def pause(self) -> None:
        if self.state.status is not SpeechStatus.SPEAKING:
            return
        self._engine.pause()
        self.state.status = SpeechStatus.PAUSED
        self.announcer.announce("Speech paused")

    def resume(self) -> None:
        if self.state.status is not SpeechStatus.PAUSED:
            return
        self._engine.resume()
        self.state.status = SpeechStatus.SPEAKING
        self.announcer.announce("Speech resumed")

    def toggle(self, messages: Sequence[str]) -> None:
        """Play/pause button: pause, resume, or read the selected message."""

        if self.state.status is SpeechStatus.SPEAKING:
            self.pause()
        elif self.state.status is SpeechStatus.PAUSED:
            self.resume()
        elif messages:
            index = self.state.message_index
            text = messages[index] if 0 <= index < len(messages) else messages[0]
            self._start(text)

    def stop(self) -> None:
        if self.state.status is SpeechStatus.IDLE:
            return
        self._release()
        self.state.status = SpeechStatus.IDLE
        self.state.message_index = 0
        self.announcer.announce("Speech stopped and reset")

    def set_muted(self, muted: bool) -> None:
        self.state.muted = bool(muted)
        if self._utterance is not None:
            self._utterance.volume = self._volume()
        self.announcer.announce("Muted" if self.state.muted else "Unmuted")

    def toggle_mute(self) -> None:
        self.set_muted(not self.state.muted)

    def close(self) -> None:
        self._release()
        self.state.status = SpeechStatus.IDLE

    def _volume(self) -> float:
        return 0.0 if self.state.muted else 1.0

    def _release(self) -> None:
        if self._utterance is not None:
            self._utterance = None
            self._engine.cancel()

    def _start(self, text: str) -> None:
        # The engine is shared; clear whatever it is speaking, ours or not.
        self._utterance = None
        self._engine.cancel()
        # Volume is fixed before the engine sees the utterance.
        utterance = Utterance(text=strip_markup(text), volume=self._volume())
        utterance.on_end = lambda: self._handle_end(utterance)
        utterance.on_error = lambda reason: self._handle_error(utterance, reason)
        self._utterance = utterance
        self.state.status = SpeechStatus.SPEAKING
        self.announcer.announce("Started reading insights")
        self._engine.speak(utterance)

    def _handle_end(self, utterance: Utterance) -> None:
        if utterance is not self._utterance:
            return
        self._utterance = None
        self.state.status = SpeechStatus.IDLE
        self.announcer.announce("Finished reading insights")

    def _handle_error(self, utterance: Utterance, reason: str) -> None:
        if utterance is not self._utterance:
            return
        logger.warning("Speech synthesis failed: %s", reason)
        self._utterance = None
        self.state.status = SpeechStatus.IDLE


__all__ = ["SPEECH_PITCH", "SPEECH_RATE", "SpeechController", "SpeechEngine", "Utterance"]
