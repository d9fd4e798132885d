"""Upload -> Insights flows driven against the real app over ASGI."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from chartspeak.flows import (
    APOLOGY,
    NO_PRIOR_ANALYSIS,
    AnalysisClient,
    AnalysisRequestError,
    AnalysisResult,
    ChatMessage,
    InsightsSession,
    SelectedFile,
    UploadFlow,
    UploadState,
    open_insights,
)
from chartspeak.main import app
from chartspeak.services import ChartAnalysisService, get_chart_analysis_service
from chartspeak.sonification import SpeechController, SpeechStatus

CHART = SelectedFile(name="sales.png", content_type="image/png", data=b"\x89PNGchart")


class ScriptedLlmClient:
    prompts: list[str] = []
    replies: list[str] = []

    def __init__(self, api_key: str) -> None:
        pass

    async def describe_image(self, *, prompt, image, mime_type):
        ScriptedLlmClient.prompts.append(prompt)
        return ScriptedLlmClient.replies.pop(0)


@pytest.fixture(autouse=True)
def scripted_llm():
    ScriptedLlmClient.prompts = []
    ScriptedLlmClient.replies = ["**Chart Type**: bar chart", "December is highest."]
    app.dependency_overrides[get_chart_analysis_service] = lambda: ChartAnalysisService(
        api_key="test-key",
        client_factory=ScriptedLlmClient,
    )
    yield
    app.dependency_overrides.clear()


def run_with_client(scenario, transport: httpx.AsyncBaseTransport | None = None):
    async def runner():
        async with httpx.AsyncClient(
            transport=transport or httpx.ASGITransport(app=app),
            base_url="http://testserver",
        ) as http:
            return await scenario(AnalysisClient(http))

    return asyncio.run(runner())


def _mock_transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


# Upload -------------------------------------------------------------------


def test_non_image_file_is_rejected(announcer):
    flow = UploadFlow(client=None, announcer=announcer)

    accepted = flow.select_file(SelectedFile("notes.txt", "text/plain", b"hello"))

    assert not accepted
    assert flow.file is None
    assert flow.state is UploadState.EMPTY
    assert announcer.current == "Invalid file type. Please select an image file."


def test_oversized_file_is_rejected(announcer):
    flow = UploadFlow(client=None, announcer=announcer, max_bytes=4)

    assert not flow.select_file(CHART)
    assert flow.file is None
    assert announcer.current.startswith("File too large")


def test_image_selection_populates_preview(announcer):
    flow = UploadFlow(client=None, announcer=announcer)

    assert flow.select_file(CHART)
    assert flow.can_analyze
    assert flow.preview.startswith("data:image/png;base64,")
    assert announcer.current == (
        "File selected: sales.png. Press the Analyze Chart button to continue."
    )

    flow.remove_file()
    assert flow.state is UploadState.EMPTY
    assert not flow.can_analyze


def test_analyze_returns_result_for_insights_stage(announcer):
    async def scenario(client):
        flow = UploadFlow(client, announcer=announcer)
        flow.select_file(CHART)
        return flow, await flow.analyze()

    flow, result = run_with_client(scenario)

    assert isinstance(result, AnalysisResult)
    assert result.insights == "**Chart Type**: bar chart"
    assert result.image == CHART
    assert result.preview == flow.preview
    assert flow.state is UploadState.SUCCEEDED
    assert announcer.current == "Analysis complete. Redirecting to insights."


def test_analyze_without_file_is_noop():
    async def scenario(client):
        return await UploadFlow(client).analyze()

    assert run_with_client(scenario) is None


def test_server_error_keeps_file_for_retry(announcer):
    app.dependency_overrides[get_chart_analysis_service] = lambda: ChartAnalysisService(
        api_key=None,
        client_factory=ScriptedLlmClient,
    )

    async def scenario(client):
        flow = UploadFlow(client, announcer=announcer)
        flow.select_file(CHART)
        return flow, await flow.analyze()

    flow, result = run_with_client(scenario)

    assert result is None
    assert flow.state is UploadState.FILE_SELECTED
    assert flow.file == CHART
    assert flow.error.startswith("Gemini API key not configured")
    assert announcer.current == flow.error


class PendingClient:
    """Analysis client whose request never completes."""

    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def analyze(self, image, question=None, history=None):
        self.started.set()
        await asyncio.Event().wait()


def test_cancelled_analysis_allows_retry(announcer):
    async def scenario():
        client = PendingClient()
        flow = UploadFlow(client, announcer=announcer)
        flow.select_file(CHART)
        task = asyncio.create_task(flow.analyze())
        await client.started.wait()
        assert flow.state is UploadState.UPLOADING

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return flow

    flow = asyncio.run(scenario())

    assert flow.state is UploadState.FILE_SELECTED
    assert flow.can_analyze
    assert flow.file == CHART

    flow.remove_file()
    assert flow.state is UploadState.EMPTY
    assert flow.select_file(CHART)


def test_missing_insights_field_is_an_error():
    transport = _mock_transport(lambda request: httpx.Response(200, json={}))

    async def scenario(client):
        flow = UploadFlow(client)
        flow.select_file(CHART)
        return flow, await flow.analyze()

    flow, result = run_with_client(scenario, transport)

    assert result is None
    assert flow.error == "No insights returned from API"


def test_network_error_is_reported():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario(client):
        with pytest.raises(AnalysisRequestError) as excinfo:
            await client.analyze(CHART)
        return str(excinfo.value)

    assert run_with_client(scenario, _mock_transport(handler)) == (
        "Failed to analyze chart. Please try again."
    )


def test_error_details_used_when_error_missing():
    transport = _mock_transport(
        lambda request: httpx.Response(502, json={"details": "upstream down"})
    )

    async def scenario(client):
        with pytest.raises(AnalysisRequestError) as excinfo:
            await client.analyze(CHART)
        return str(excinfo.value)

    assert run_with_client(scenario, transport) == "upstream down"


# Insights -----------------------------------------------------------------


def test_open_without_prior_analysis(announcer):
    outcome = open_insights(NO_PRIOR_ANALYSIS, client=None, announcer=announcer)

    assert outcome is NO_PRIOR_ANALYSIS
    assert announcer.current == "No chart data found. Returning to upload."


def test_open_with_result_seeds_conversation(announcer):
    result = AnalysisResult("Initial insight", CHART, CHART.data_url())

    session = open_insights(result, client=None, announcer=announcer)

    assert isinstance(session, InsightsSession)
    assert session.messages == [ChatMessage("assistant", "Initial insight")]
    assert announcer.current == "Chart insights loaded successfully"


def test_follow_up_question_sends_history():
    ScriptedLlmClient.replies = ["December is highest."]
    result = AnalysisResult("Sales grow all year.", CHART, CHART.data_url())

    async def scenario(client):
        session = InsightsSession(result, client)
        await session.ask("  Which month is highest?  ")
        return session

    session = run_with_client(scenario)

    assert [m.role for m in session.messages] == ["assistant", "user", "assistant"]
    assert session.messages[1].content == "Which month is highest?"
    assert session.messages[-1].content == "December is highest."
    prompt = ScriptedLlmClient.prompts[0]
    assert "Assistant: Sales grow all year." in prompt
    assert "User's new question: Which month is highest?" in prompt


def test_blank_question_is_ignored():
    result = AnalysisResult("Sales grow all year.", CHART, CHART.data_url())

    async def scenario(client):
        session = InsightsSession(result, client)
        return session, await session.ask("   ")

    session, reply = run_with_client(scenario)

    assert reply is None
    assert len(session.messages) == 1


def test_follow_up_failure_appends_apology(announcer):
    seen: list[dict] = []

    def handler(request):
        seen.append({"body": request.content})
        return httpx.Response(500, json={"error": "Failed to analyze chart"})

    result = AnalysisResult("Sales grow all year.", CHART, CHART.data_url())

    async def scenario(client):
        session = InsightsSession(result, client, announcer=announcer)
        await session.ask("Why?")
        return session

    session = run_with_client(scenario, _mock_transport(handler))

    assert session.messages[-1] == ChatMessage("assistant", APOLOGY)
    assert announcer.current == "Error generating response. Please try again."
    body = seen[0]["body"]
    assert b'name="question"' in body
    assert json.dumps([{"role": "assistant", "content": "Sales grow all year."}]).encode() in body


def test_session_speech_controls(speech_engine):
    result = AnalysisResult("**Bold** insight", CHART, CHART.data_url())
    speech = SpeechController(speech_engine)
    session = InsightsSession(result, client=None, speech=speech)

    session.toggle_speech()
    assert speech.status is SpeechStatus.SPEAKING
    assert speech_engine.last.text == "Bold insight"

    session.toggle_mute()
    assert speech_engine.last.volume == 0.0

    session.read_aloud(0)
    assert len(speech_engine.spoken) == 2

    session.close()
    assert speech.status is SpeechStatus.IDLE


def test_read_aloud_rejects_user_messages():
    transport = _mock_transport(lambda request: httpx.Response(200, json={"insights": "Answer."}))
    result = AnalysisResult("insight", CHART, CHART.data_url())

    async def scenario(client):
        session = InsightsSession(result, client)
        await session.ask("question")
        return session

    session = run_with_client(scenario, transport)
    assert session.messages[1] == ChatMessage("user", "question")

    with pytest.raises(RuntimeError):
        session.toggle_speech()
    with pytest.raises(ValueError):
        session.read_aloud(1)
