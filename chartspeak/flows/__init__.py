"""Client-side screen flows: Upload -> Insights, with an explicit result handoff."""

from .client import AnalysisClient, AnalysisRequestError
from .insights import APOLOGY, InsightsSession, open_insights
from .types import (
    NO_PRIOR_ANALYSIS,
    AnalysisResult,
    ChatMessage,
    NoPriorAnalysis,
    SelectedFile,
)
from .upload import UploadFlow, UploadState

__all__ = [
    "APOLOGY",
    "AnalysisClient",
    "AnalysisRequestError",
    "AnalysisResult",
    "ChatMessage",
    "InsightsSession",
    "NO_PRIOR_ANALYSIS",
    "NoPriorAnalysis",
    "SelectedFile",
    "UploadFlow",
    "UploadState",
    "open_insights",
]
