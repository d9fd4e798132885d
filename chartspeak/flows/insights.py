"""Insights screen: chat about an analyzed chart and have answers read aloud."""

from __future__ import annotations

import logging

from chartspeak.sonification.announcer import StatusAnnouncer
from chartspeak.sonification.speech import SpeechController

from .client import AnalysisClient, AnalysisRequestError
from .types import AnalysisResult, ChatMessage, NoPriorAnalysis

logger = logging.getLogger(__name__)

APOLOGY = (
    "I apologize, but I'm having trouble generating a response right now. "
    "Please try again."
)


class InsightsSession:
    """Conversation seeded with the initial insights for one chart."""

    def __init__(
        self,
        result: AnalysisResult,
        client: AnalysisClient,
        *,
        speech: SpeechController | None = None,
        announcer: StatusAnnouncer | None = None,
    ) -> None:
        self.result = result
        self._client = client
        self.announcer = announcer or StatusAnnouncer()
        self.speech = speech
        self._messages: list[ChatMessage] = [ChatMessage("assistant", result.insights)]

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def assistant_messages(self) -> list[str]:
        return [message.content for message in self._messages if message.role == "assistant"]

    async def ask(self, question: str) -> ChatMessage | None:
        """Send a follow-up question; failures become an apologetic reply."""

        text = question.strip()
        if not text:
            return None

        history = list(self._messages)
        self._messages.append(ChatMessage("user", text))
        self.announcer.announce("Question submitted. Generating response...")

        try:
            answer = await self._client.analyze(self.result.image, question=text, history=history)
        except AnalysisRequestError as exc:
            logger.error("Error getting response: %s", exc)
            reply = ChatMessage("assistant", APOLOGY)
            self._messages.append(reply)
            self.announcer.announce("Error generating response. Please try again.")
            return reply

        reply = ChatMessage("assistant", answer)
        self._messages.append(reply)
        self.announcer.announce("Response received. New insight available.")
        return reply

    # Speech -------------------------------------------------------------

    def _require_speech(self) -> SpeechController:
        if self.speech is None:
            raise RuntimeError("No speech controller attached to this session")
        return self.speech

    def toggle_speech(self) -> None:
        self._require_speech().toggle(self.assistant_messages)

    def read_aloud(self, index: int) -> None:
        message = self._messages[index]
        if message.role != "assistant":
            raise ValueError("Only assistant messages can be read aloud")
        self._require_speech().speak(message.content)

    def stop_speech(self) -> None:
        self._require_speech().stop()

    def toggle_mute(self) -> None:
        self._require_speech().toggle_mute()

    def close(self) -> None:
        if self.speech is not None:
            self.speech.close()


def open_insights(
    previous: AnalysisResult | NoPriorAnalysis,
    client: AnalysisClient,
    *,
    speech: SpeechController | None = None,
    announcer: StatusAnnouncer | None = None,
) -> InsightsSession | NoPriorAnalysis:
    """Start the insights stage, or report that the upload stage comes first."""

    announcer = announcer or StatusAnnouncer()
    if isinstance(previous, NoPriorAnalysis):
        announcer.announce("No chart data found. Returning to upload.")
        return previous

    session = InsightsSession(previous, client, speech=speech, announcer=announcer)
    announcer.announce("Chart insights loaded successfully")
    return session


__all__ = ["APOLOGY", "InsightsSession", "open_insights"]
