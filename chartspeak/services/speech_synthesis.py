"""Amazon Polly narration of chart insights."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape as html_escape
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from chartspeak.config.settings import settings
from chartspeak.sonification.speech import SPEECH_RATE
from chartspeak.utils import strip_markup

from .aws import create_boto3_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpeechSynthesisResult:
    """Narration audio for a block of insights text."""

    audio_bytes: bytes
    media_type: str
    voice_id: str


class SpeechSynthesisError(RuntimeError):
    """Raised when Polly cannot narrate the text."""


class EmptySpeechTextError(ValueError):
    """Raised when nothing speakable remains after stripping markup."""


class SpeechSynthesisService:
    """Narrate insights with the same pacing as the in-browser reader."""

    def __init__(
        self,
        client: Any | None = None,
        *,
        default_voice_id: str = settings.polly.default_voice_id,
    ) -> None:
        self._client = client
        self._default_voice_id = default_voice_id

    def _polly(self) -> Any:
        if self._client is None:
            self._client = create_boto3_client("polly")
        return self._client

    @staticmethod
    def build_ssml(text: str, *, rate: float = SPEECH_RATE) -> str:
        rate_pct = max(60, min(140, int(round(rate * 100))))
        if rate_pct == 100:
            return f"<speak>{html_escape(text)}</speak>"
        return f'<speak><prosody rate="{rate_pct}%">{html_escape(text)}</prosody></speak>'

    async def synthesize(self, text: str, *, voice_id: str | None = None) -> SpeechSynthesisResult:
        """Strip markup, convert to SSML and return MP3 bytes."""

        spoken = strip_markup(text).strip()
        if not spoken:
            raise EmptySpeechTextError("No speakable text provided")

        voice = voice_id or self._default_voice_id
        try:
            response: dict[str, Any] = await run_in_threadpool(
                self._polly().synthesize_speech,
                TextType="ssml",
                Text=self.build_ssml(spoken),
                VoiceId=voice,
                Engine="neural",
                OutputFormat="mp3",
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Polly synth failed for voice '%s'", voice)
            raise SpeechSynthesisError(f"Failed to synthesize speech: {exc}") from exc

        audio_stream = response.get("AudioStream")
        if audio_stream is None:
            raise SpeechSynthesisError("Polly returned no audio stream.")
        audio_bytes = audio_stream.read()
        if not audio_bytes:
            raise SpeechSynthesisError("Polly returned an empty audio stream.")

        return SpeechSynthesisResult(
            audio_bytes=audio_bytes,
            media_type="audio/mpeg",
            voice_id=voice,
        )


_DEFAULT_SERVICE = SpeechSynthesisService()


def get_speech_synthesis_service() -> SpeechSynthesisService:
    """Return the default speech synthesis service instance."""

    return _DEFAULT_SERVICE


__all__ = [
    "EmptySpeechTextError",
    "SpeechSynthesisError",
    "SpeechSynthesisResult",
    "SpeechSynthesisService",
    "get_speech_synthesis_service",
]
