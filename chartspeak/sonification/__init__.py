"""Chart sonification: tone mapping, autoplay and speech playback controllers.

* `tones` maps data values to pitch and renders sine tones.
* `playback` owns autoplay, navigation and the single active tone.
* `speech` owns the single active text-to-speech utterance.
"""

from .announcer import StatusAnnouncer
from .playback import PlaybackController, describe_point
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .speech import SpeechController, SpeechEngine, Utterance
from .tones import (
    RenderedTone,
    RenderedToneOutput,
    ToneOutput,
    ToneRenderer,
    frequency,
    rounded_hertz,
    volume_to_gain,
)
from .types import DEMO_POINTS, DataPoint, PlaybackState, SpeechState, SpeechStatus

__all__ = [
    "AsyncioScheduler",
    "DEMO_POINTS",
    "DataPoint",
    "PlaybackController",
    "PlaybackState",
    "RenderedTone",
    "RenderedToneOutput",
    "Scheduler",
    "SpeechController",
    "SpeechEngine",
    "SpeechState",
    "SpeechStatus",
    "StatusAnnouncer",
    "TimerHandle",
    "ToneOutput",
    "ToneRenderer",
    "Utterance",
    "describe_point",
    "frequency",
    "rounded_hertz",
    "volume_to_gain",
]
