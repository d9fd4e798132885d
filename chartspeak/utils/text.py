"""Text helpers shared by speech synthesis and the upload flow."""

from __future__ import annotations

import base64
import re

_HEADING_MARKER = re.compile(r"#{1,6}\s")


def strip_markup(text: str) -> str:
    """Remove markdown markers that speech engines would read aloud."""

    cleaned = text.replace("**", "").replace("*", "")
    cleaned = _HEADING_MARKER.sub("", cleaned)
    return cleaned.replace("`", "")


def to_data_url(data: bytes, content_type: str) -> str:
    """Encode raw bytes as a base64 data URL."""

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
