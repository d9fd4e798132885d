"""Schema for text-to-speech requests."""

from typing import Optional

from pydantic import BaseModel, Field


class TextToSpeechRequest(BaseModel):
    text: str = Field(min_length=1, max_length=3000)
    voice_id: Optional[str] = None
