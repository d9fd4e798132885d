"""HTTP client for the chart analysis endpoint."""

from __future__ import annotations

import json
import logging
from typing import Sequence

import httpx

from .types import ChatMessage, SelectedFile

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-chart"
GENERIC_FAILURE = "Failed to analyze chart"
TRANSPORT_FAILURE = "Failed to analyze chart. Please try again."
MISSING_INSIGHTS = "No insights returned from API"


class AnalysisRequestError(RuntimeError):
    """Raised when the analysis endpoint cannot produce insights."""


class AnalysisClient:
    """Post chart images (and follow-up questions) to `/api/analyze-chart`."""

    def __init__(self, http_client: httpx.AsyncClient, *, path: str = ANALYZE_PATH) -> None:
        self._http = http_client
        self._path = path

    async def analyze(
        self,
        image: SelectedFile,
        *,
        question: str | None = None,
        history: Sequence[ChatMessage] | None = None,
    ) -> str:
        data: dict[str, str] = {}
        if question is not None:
            data["question"] = question
        if history is not None:
            data["history"] = json.dumps([message.to_dict() for message in history])

        files = {"image": (image.name, image.data, image.content_type)}
        try:
            response = await self._http.post(self._path, data=data, files=files)
        except httpx.HTTPError as exc:
            logger.error("Analysis request failed: %s", exc)
            raise AnalysisRequestError(TRANSPORT_FAILURE) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.is_error:
            logger.error("API error status=%s body=%s", response.status_code, payload)
            raise AnalysisRequestError(
                payload.get("error") or payload.get("details") or GENERIC_FAILURE
            )

        insights = payload.get("insights")
        if not insights:
            raise AnalysisRequestError(MISSING_INSIGHTS)
        return str(insights)


__all__ = ["AnalysisClient", "AnalysisRequestError"]
