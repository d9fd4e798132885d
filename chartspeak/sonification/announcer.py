"""Status announcements for assistive technology."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class StatusAnnouncer:
    """Hold the latest polite status message, like an aria-live region.

    Each announcement replaces the previous one; a bounded history is kept so
    front ends and tests can inspect what was said.
    """

    def __init__(self, *, history_limit: int = 50) -> None:
        self._history_limit = history_limit
        self._history: list[str] = []

    def announce(self, message: str) -> None:
        logger.debug("announce: %s", message)
        self._history.append(message)
        if len(self._history) > self._history_limit:
            del self._history[: -self._history_limit]

    @property
    def current(self) -> str | None:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()


__all__ = ["StatusAnnouncer"]
