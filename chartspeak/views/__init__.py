"""Pydantic schemas used as views in the MVC architecture."""

from .analysis import AnalysisErrorResponse, AnalysisResponse, ChatMessageView
from .sonification import DataPointResponse, SonificationResponse
from .tts import TextToSpeechRequest

__all__ = [
    "AnalysisErrorResponse",
    "AnalysisResponse",
    "ChatMessageView",
    "DataPointResponse",
    "SonificationResponse",
    "TextToSpeechRequest",
]
