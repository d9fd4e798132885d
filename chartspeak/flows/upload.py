"""Upload screen state: pick a chart image and send it for analysis.

States move `EMPTY -> FILE_SELECTED -> UPLOADING -> SUCCEEDED`; a failed
analysis drops back to `FILE_SELECTED` with the file kept so the user can
retry.
"""

from __future__ import annotations

import logging
from enum import Enum

from chartspeak.config.settings import settings
from chartspeak.sonification.announcer import StatusAnnouncer

from .client import AnalysisClient, AnalysisRequestError
from .types import AnalysisResult, SelectedFile

logger = logging.getLogger(__name__)


class UploadState(str, Enum):
    EMPTY = "empty"
    FILE_SELECTED = "file_selected"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"


class UploadFlow:
    def __init__(
        self,
        client: AnalysisClient,
        *,
        announcer: StatusAnnouncer | None = None,
        max_bytes: int = settings.upload.max_bytes,
    ) -> None:
        self._client = client
        self.announcer = announcer or StatusAnnouncer()
        self._max_bytes = max_bytes
        self.state = UploadState.EMPTY
        self.file: SelectedFile | None = None
        self.preview: str | None = None
        self.error: str | None = None

    @property
    def can_analyze(self) -> bool:
        return self.state is UploadState.FILE_SELECTED and self.file is not None

    def select_file(self, selected: SelectedFile) -> bool:
        """Accept an image file; anything else is announced and ignored."""

        if not selected.is_image:
            self.announcer.announce("Invalid file type. Please select an image file.")
            return False
        if selected.size > self._max_bytes:
            limit_mb = self._max_bytes / 1024 / 1024
            self.announcer.announce(f"File too large. Maximum file size: {limit_mb:g}MB.")
            return False
        if self.state is UploadState.UPLOADING:
            return False

        self.file = selected
        self.preview = selected.data_url()
        self.error = None
        self.state = UploadState.FILE_SELECTED
        self.announcer.announce(
            f"File selected: {selected.name}. Press the Analyze Chart button to continue."
        )
        return True

    def remove_file(self) -> None:
        if self.state is UploadState.UPLOADING:
            return
        self.file = None
        self.preview = None
        self.error = None
        self.state = UploadState.EMPTY
        self.announcer.announce("File removed. Upload area ready for new file.")

    async def analyze(self) -> AnalysisResult | None:
        if not self.can_analyze:
            return None

        selected = self.file
        self.state = UploadState.UPLOADING
        self.error = None
        self.announcer.announce("Processing chart. Please wait.")

        try:
            insights = await self._client.analyze(selected)
        except AnalysisRequestError as exc:
            logger.error("Error analyzing chart: %s", exc)
            self.error = str(exc)
            self.state = UploadState.FILE_SELECTED
            self.announcer.announce(self.error)
            return None
        except BaseException:
            # Cancelled or crashed mid-request; the file stays selected for a retry.
            self.state = UploadState.FILE_SELECTED
            raise

        self.state = UploadState.SUCCEEDED
        self.announcer.announce("Analysis complete. Redirecting to insights.")
        return AnalysisResult(
            insights=insights,
            image=selected,
            preview=self.preview or selected.data_url(),
        )


__all__ = ["UploadFlow", "UploadState"]
