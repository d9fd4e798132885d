"""Values handed between the upload and insights stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from chartspeak.utils import to_data_url

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class SelectedFile:
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    def data_url(self) -> str:
        return to_data_url(self.data, self.content_type)


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a successful upload, consumed by the insights stage."""

    insights: str
    image: SelectedFile
    preview: str


@dataclass(frozen=True)
class NoPriorAnalysis:
    """The insights stage was opened without a completed analysis."""


NO_PRIOR_ANALYSIS = NoPriorAnalysis()


__all__ = [
    "AnalysisResult",
    "ChatMessage",
    "NO_PRIOR_ANALYSIS",
    "NoPriorAnalysis",
    "Role",
    "SelectedFile",
]
