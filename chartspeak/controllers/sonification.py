"""Demonstration chart data and tone rendering endpoints."""

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from chartspeak.config.settings import settings
from chartspeak.sonification import (
    DEMO_POINTS,
    ToneRenderer,
    describe_point,
    frequency,
    rounded_hertz,
    volume_to_gain,
)
from chartspeak.views import DataPointResponse, SonificationResponse

router = APIRouter(prefix="/api/sonification", tags=["sonification"])

_renderer = ToneRenderer()


@router.get("/points", response_model=SonificationResponse)
async def list_points() -> SonificationResponse:
    """Return the demonstration chart with each point's pitch."""

    return SonificationResponse(
        points=[
            DataPointResponse(
                index=point.index,
                label=point.label,
                value=point.value,
                frequency_hz=rounded_hertz(point.value),
                description=describe_point(point),
            )
            for point in DEMO_POINTS
        ],
        autoplay_interval_ms=int(round(settings.sonification.autoplay_interval_seconds * 1000)),
        tone_duration_ms=int(round(settings.sonification.tone_duration_seconds * 1000)),
    )


@router.get("/points/{index}/tone", response_class=Response)
async def point_tone(
    index: int,
    volume: int = Query(default=settings.sonification.default_volume, ge=0, le=100),
    muted: bool = False,
) -> Response:
    """Render the tone for one data point as a WAV clip."""

    if not 0 <= index < len(DEMO_POINTS):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No data point at index {index}",
        )

    point = DEMO_POINTS[index]
    wav_bytes = await run_in_threadpool(
        _renderer.render_wav,
        frequency(point.value),
        settings.sonification.tone_duration_seconds,
        volume_to_gain(volume, muted),
    )
    return Response(
        content=wav_bytes,
        media_type="audio/wav",
        headers={"X-Tone-Frequency": str(rounded_hertz(point.value))},
    )
