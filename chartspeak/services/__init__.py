"""Service layer helpers for external integrations."""

from .chart_analysis import (
    AnalysisConfigurationError,
    ChartAnalysisError,
    ChartAnalysisOutcome,
    ChartAnalysisService,
    get_chart_analysis_service,
    parse_history,
)
from .llm_client import GeminiLlmClient, LlmInvocationError
from .speech_synthesis import (
    EmptySpeechTextError,
    SpeechSynthesisError,
    SpeechSynthesisResult,
    SpeechSynthesisService,
    get_speech_synthesis_service,
)

__all__ = [
    "AnalysisConfigurationError",
    "ChartAnalysisError",
    "ChartAnalysisOutcome",
    "ChartAnalysisService",
    "get_chart_analysis_service",
    "parse_history",
    "GeminiLlmClient",
    "LlmInvocationError",
    "EmptySpeechTextError",
    "SpeechSynthesisError",
    "SpeechSynthesisResult",
    "SpeechSynthesisService",
    "get_speech_synthesis_service",
]
