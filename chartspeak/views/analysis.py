"""Schemas for chart analysis requests and responses."""

from typing import Literal, Optional

from pydantic import BaseModel


class ChatMessageView(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AnalysisResponse(BaseModel):
    insights: str


class AnalysisErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
