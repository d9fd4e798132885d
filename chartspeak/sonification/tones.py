"""Value-to-pitch mapping and sine tone rendering."""

from __future__ import annotations

import io
import math
import wave
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
from scipy.signal.windows import tukey

from chartspeak.config.settings import settings

MIN_FREQUENCY_HZ = 200.0
MAX_FREQUENCY_HZ = 800.0


def frequency(value: float) -> float:
    """Map a 0..100 data value linearly onto 200..800 Hz."""

    return MIN_FREQUENCY_HZ + (value / 100) * (MAX_FREQUENCY_HZ - MIN_FREQUENCY_HZ)


def rounded_hertz(value: float) -> int:
    """Frequency for display, rounded half-up."""

    return int(math.floor(frequency(value) + 0.5))


def volume_to_gain(volume: int, muted: bool) -> float:
    if muted:
        return 0.0
    return max(0, min(100, volume)) / 100


class ToneHandle(Protocol):
    def stop(self) -> None: ...


class ToneOutput(Protocol):
    """Single audio output node that tones are routed through."""

    def play(self, frequency_hz: float, duration: float) -> ToneHandle: ...

    def set_gain(self, gain: float) -> None: ...


class ToneRenderer:
    """Render short sine tones to 16-bit mono WAV bytes."""

    def __init__(
        self,
        *,
        sample_rate: int = settings.sonification.sample_rate,
        fade_fraction: float = 0.1,
    ) -> None:
        self._sample_rate = sample_rate
        self._fade_fraction = fade_fraction

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def render_samples(self, frequency_hz: float, duration: float, gain: float) -> np.ndarray:
        n = max(1, int(round(self._sample_rate * duration)))
        t = np.arange(n, dtype=np.float32) / self._sample_rate
        samples = np.sin(2 * np.pi * frequency_hz * t).astype(np.float32)
        # Short fades keep the oscillator start/stop from clicking.
        samples *= tukey(n, alpha=self._fade_fraction).astype(np.float32)
        return samples * float(gain)

    def render_wav(self, frequency_hz: float, duration: float, gain: float) -> bytes:
        audio = np.clip(self.render_samples(frequency_hz, duration, gain), -1.0, 1.0)
        pcm16 = (audio * 32767.0).astype(np.int16)
        with io.BytesIO() as buffer:
            with wave.open(buffer, "wb") as wave_file:
                wave_file.setnchannels(1)
                wave_file.setsampwidth(2)
                wave_file.setframerate(self._sample_rate)
                wave_file.writeframes(pcm16.tobytes())
            return buffer.getvalue()


@dataclass
class RenderedTone:
    frequency_hz: float
    gain: float
    wav_bytes: bytes
    stopped: bool = field(default=False)

    def stop(self) -> None:
        self.stopped = True


class RenderedToneOutput:
    """`ToneOutput` that renders each tone to WAV bytes for a client to play."""

    def __init__(self, renderer: ToneRenderer | None = None, *, gain: float = 0.8) -> None:
        self._renderer = renderer or ToneRenderer()
        self._gain = gain
        self.last_tone: RenderedTone | None = None

    @property
    def gain(self) -> float:
        return self._gain

    def set_gain(self, gain: float) -> None:
        self._gain = max(0.0, min(1.0, gain))

    def play(self, frequency_hz: float, duration: float) -> RenderedTone:
        tone = RenderedTone(
            frequency_hz=frequency_hz,
            gain=self._gain,
            wav_bytes=self._renderer.render_wav(frequency_hz, duration, self._gain),
        )
        self.last_tone = tone
        return tone


__all__ = [
    "MAX_FREQUENCY_HZ",
    "MIN_FREQUENCY_HZ",
    "RenderedTone",
    "RenderedToneOutput",
    "ToneHandle",
    "ToneOutput",
    "ToneRenderer",
    "frequency",
    "rounded_hertz",
    "volume_to_gain",
]
