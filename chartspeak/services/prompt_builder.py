"""Prompt templates for chart analysis.

Two templates exist:
* The initial prompt asks for a six-section accessible chart description.
* The follow-up prompt replays the conversation so far and appends the new
  question.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

PERSONA = (
    "You are an expert data analyst helping visually impaired users understand "
    "charts and graphs."
)

INITIAL_SECTIONS = (
    (
        "Chart Type",
        "Identify what type of chart/graph this is (bar chart, line chart, pie chart, etc.)",
    ),
    ("Overall Trend", "Describe the main pattern or trend shown in the data"),
    ("Key Data Points", "List the most important values, ranges, or measurements"),
    (
        "Notable Observations",
        "Point out any peaks, valleys, anomalies, or interesting patterns",
    ),
    (
        "Context & Insights",
        "Provide meaningful insights about what this data suggests or implies",
    ),
    (
        "Recommendations",
        "If applicable, suggest what actions or further analysis might be valuable",
    ),
)


@dataclass(frozen=True)
class PromptBundle:
    prompt: str
    follow_up: bool


def _speaker(role: str) -> str:
    return "User" if role == "user" else "Assistant"


def format_conversation(history: Sequence[Mapping[str, str]]) -> str:
    """Render prior turns as `User:` / `Assistant:` blocks."""

    return "\n\n".join(
        f"{_speaker(str(turn.get('role', '')))}: {turn.get('content', '')}"
        for turn in history
    )


def build_initial_prompt() -> str:
    sections = "\n\n".join(
        f"{idx}. **{title}**: {description}"
        for idx, (title, description) in enumerate(INITIAL_SECTIONS, start=1)
    )
    return (
        f"{PERSONA} \n\n"
        "Analyze this chart image and provide a comprehensive, accessible description that includes:\n\n"
        f"{sections}\n\n"
        "Format your response in clear markdown with headers and bullet points for easy reading "
        "and text-to-speech compatibility. Be thorough but concise. Focus on making the data "
        "accessible and understandable."
    )


def build_follow_up_prompt(question: str, history: Sequence[Mapping[str, str]]) -> str:
    return (
        f"{PERSONA} \n\n"
        "Previous conversation:\n"
        f"{format_conversation(history)}\n\n"
        f"User's new question: {question}\n\n"
        "Based on the chart image and the conversation history, provide a clear, concise answer "
        "to the user's question. Format your response in markdown for easy reading and "
        "text-to-speech compatibility. Be helpful and specific."
    )


def build_prompt(
    question: str | None,
    history: Sequence[Mapping[str, str]] | None,
) -> PromptBundle:
    """Pick the follow-up template only when both question and history exist."""

    if question and history is not None:
        return PromptBundle(build_follow_up_prompt(question, history), follow_up=True)
    return PromptBundle(build_initial_prompt(), follow_up=False)


__all__ = [
    "INITIAL_SECTIONS",
    "PromptBundle",
    "build_follow_up_prompt",
    "build_initial_prompt",
    "build_prompt",
    "format_conversation",
]
