"""Chart analysis endpoint.

POST `/api/analyze-chart` accepts a multipart form with the chart `image`
plus an optional follow-up `question` and JSON `history`, and answers with
`{"insights": ...}` or `{"error": ..., "details": ...}`.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from chartspeak.services import (
    AnalysisConfigurationError,
    ChartAnalysisError,
    ChartAnalysisService,
    get_chart_analysis_service,
)
from chartspeak.telemetry import record_analysis
from chartspeak.views import AnalysisErrorResponse, AnalysisResponse

router = APIRouter(prefix="/api", tags=["analysis"])

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

ChartAnalysisServiceDep = Annotated[ChartAnalysisService, Depends(get_chart_analysis_service)]

_IMAGE_UPLOAD = File(None)
_QUESTION_FORM = Form(None)
_HISTORY_FORM = Form(None)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = AnalysisErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/analyze-chart",
    response_model=AnalysisResponse,
    responses={
        400: {"model": AnalysisErrorResponse},
        500: {"model": AnalysisErrorResponse},
    },
)
async def analyze_chart(
    service: ChartAnalysisServiceDep,
    image: Optional[UploadFile] = _IMAGE_UPLOAD,
    question: Optional[str] = _QUESTION_FORM,
    history: Optional[str] = _HISTORY_FORM,
):
    """Describe an uploaded chart, or answer a follow-up question about it."""

    logger.info(
        "Analysis request received has_file=%s file_type=%s has_question=%s has_history=%s",
        image is not None,
        image.content_type if image is not None else None,
        bool(question),
        history is not None,
    )

    image_bytes = await image.read() if image is not None else b""
    if not image_bytes:
        logger.warning("No image file provided in request")
        return _error(status.HTTP_400_BAD_REQUEST, "No image file provided")

    kind = "follow_up" if question and history is not None else "initial"
    try:
        outcome = await service.analyze(
            image=image_bytes,
            mime_type=image.content_type or DEFAULT_MIME_TYPE,
            question=question,
            history=history,
        )
    except AnalysisConfigurationError as exc:
        record_analysis(kind, "config_error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    except ChartAnalysisError as exc:
        record_analysis(kind, "failed")
        logger.error("Error analyzing chart: %s", exc)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to analyze chart",
            details=str(exc),
        )

    record_analysis(kind, "ok")
    return AnalysisResponse(insights=outcome.insights)
