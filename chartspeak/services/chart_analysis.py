"""Chart analysis: prompt selection plus a single Gemini call.

The service receives the uploaded image, the optional follow-up question and
the raw JSON conversation history. It raises:

* `AnalysisConfigurationError` when no Gemini credential is configured.
* `ChartAnalysisError` for everything else (bad history payload, upstream
  failures, empty responses).

No retries are attempted; each request maps to at most one upstream call.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from chartspeak.config.settings import settings
from chartspeak.views.analysis import ChatMessageView

from .llm_client import GeminiLlmClient, LlmInvocationError
from .prompt_builder import build_prompt

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "Gemini API key not configured. Please add GEMINI_API_KEY to your .env file."
)

_HISTORY_ADAPTER = TypeAdapter(list[ChatMessageView])


class AnalysisConfigurationError(RuntimeError):
    """Raised when the model provider credential is missing."""


class ChartAnalysisError(RuntimeError):
    """Raised when a chart analysis request cannot be completed."""


@dataclass(frozen=True)
class ChartAnalysisOutcome:
    insights: str
    follow_up: bool
    prompt: str


def parse_history(raw: str | None) -> list[ChatMessageView] | None:
    """Decode the JSON-encoded history form field."""

    if raw is None:
        return None
    try:
        return _HISTORY_ADAPTER.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ChartAnalysisError(f"Invalid conversation history: {exc}") from exc


class ChartAnalysisService:
    """Forward a chart image and prompt to Gemini and return its text."""

    def __init__(
        self,
        *,
        api_key: str | None,
        client_factory: Callable[[str], GeminiLlmClient] = GeminiLlmClient,
    ) -> None:
        self._api_key = api_key
        self._client_factory = client_factory

    async def analyze(
        self,
        *,
        image: bytes,
        mime_type: str,
        question: str | None = None,
        history: str | None = None,
    ) -> ChartAnalysisOutcome:
        if not self._api_key:
            logger.error("Gemini API key not configured")
            raise AnalysisConfigurationError(MISSING_KEY_MESSAGE)

        messages = parse_history(history)
        turns = None
        if messages is not None:
            turns = [message.model_dump() for message in messages]
        bundle = build_prompt(question, turns)

        logger.info(
            "Analysis request size=%d bytes mime=%s follow_up=%s turns=%d",
            len(image),
            mime_type,
            bundle.follow_up,
            len(turns or []),
        )

        client = self._client_factory(self._api_key)
        try:
            insights = await client.describe_image(
                prompt=bundle.prompt,
                image=image,
                mime_type=mime_type,
            )
        except LlmInvocationError as exc:
            logger.exception("Gemini call failed")
            raise ChartAnalysisError(str(exc)) from exc

        logger.info("Analysis complete, insights length=%d", len(insights))
        return ChartAnalysisOutcome(
            insights=insights,
            follow_up=bundle.follow_up,
            prompt=bundle.prompt,
        )


def get_chart_analysis_service() -> ChartAnalysisService:
    """FastAPI dependency returning a service bound to the configured key."""

    api_key = settings.gemini.api_key
    return ChartAnalysisService(
        api_key=api_key.get_secret_value() if api_key else None,
    )


__all__ = [
    "AnalysisConfigurationError",
    "ChartAnalysisError",
    "ChartAnalysisOutcome",
    "ChartAnalysisService",
    "MISSING_KEY_MESSAGE",
    "get_chart_analysis_service",
    "parse_history",
]
