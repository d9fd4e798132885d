"""Thin Gemini client wrapper for multimodal chart prompts."""

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool
from google import genai
from google.genai import types

from chartspeak.config.settings import settings

logger = logging.getLogger(__name__)


class LlmInvocationError(RuntimeError):
    """Raised when the Gemini invocation fails."""


class GeminiLlmClient:
    """Invoke a Gemini model with a text prompt and one inline image."""

    def __init__(self, api_key: str, *, model: str | None = None) -> None:
        self._model = model or settings.gemini.model
        self._client = genai.Client(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    async def describe_image(
        self,
        *,
        prompt: str,
        image: bytes,
        mime_type: str,
    ) -> str:
        """Send the prompt and image in one `generate_content` call."""

        def _call() -> str:
            response = self._client.models.generate_content(
                model=self._model,
                contents=[
                    prompt,
                    types.Part.from_bytes(data=image, mime_type=mime_type),
                ],
            )
            return response.text or ""

        try:
            result = await run_in_threadpool(_call)
        except Exception as exc:  # pragma: no cover - external dependency
            raise LlmInvocationError(str(exc)) from exc

        if not result.strip():
            raise LlmInvocationError("Gemini returned an empty response")
        return result


__all__ = ["GeminiLlmClient", "LlmInvocationError"]
