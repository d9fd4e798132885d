"""Schemas describing the sonified demonstration chart."""

from pydantic import BaseModel


class DataPointResponse(BaseModel):
    index: int
    label: str
    value: int
    frequency_hz: int
    description: str


class SonificationResponse(BaseModel):
    points: list[DataPointResponse]
    autoplay_interval_ms: int
    tone_duration_ms: int
