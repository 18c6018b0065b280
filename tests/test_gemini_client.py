from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from fair_project_ideator.config import settings
from fair_project_ideator.core.errors import ProviderNotConfiguredError
from fair_project_ideator.core.state import Source
from fair_project_ideator.llm_providers import GeminiIdeaService, create_service

from conftest import TIMELINE_JSON


def _response(text, chunks=()):
    metadata = SimpleNamespace(grounding_chunks=list(chunks))
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata, content=None)])


def _web(uri, title):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


def _client(response=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response)
    return client


def test_missing_api_key_is_reported(monkeypatch):
    monkeypatch.setattr(settings.secrets, "google_api_key", None)

    with pytest.raises(ProviderNotConfiguredError):
        create_service("gemini")


@pytest.mark.anyio
async def test_brainstorm_returns_text_and_grounding_sources():
    chunks = [_web("https://a", "A"), SimpleNamespace(web=None), _web("https://b", None)]
    client = _client(_response("doc text", chunks))
    service = GeminiIdeaService(model="test-model", enable_search_grounding=True, client=client)

    result = await service.brainstorm("optics")

    assert result.text == "doc text"
    assert result.sources == [Source("https://a", "A"), Source("https://b", "")]
    kwargs = client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "test-model"
    assert '"optics"' in kwargs["contents"]
    assert kwargs["config"].tools


@pytest.mark.anyio
async def test_brainstorm_without_grounding_sends_no_tools():
    client = _client(_response("doc"))
    service = GeminiIdeaService(model="m", enable_search_grounding=False, client=client)

    await service.brainstorm("optics")

    assert client.aio.models.generate_content.await_args.kwargs["config"] is None


@pytest.mark.anyio
async def test_timeline_requests_json_output():
    client = _client(_response(TIMELINE_JSON))
    service = GeminiIdeaService(model="m", client=client)

    raw = await service.generate_timeline("Title", "Description")

    assert raw == TIMELINE_JSON
    config = client.aio.models.generate_content.await_args.kwargs["config"]
    assert config.response_mime_type == "application/json"


@pytest.mark.anyio
async def test_chat_session_streams_chunk_text():
    async def chunks():
        for text in ("Hi", None, " there"):
            yield SimpleNamespace(text=text)

    chat = MagicMock()
    chat.send_message_stream = AsyncMock(return_value=chunks())
    client = MagicMock()
    client.aio.chats.create.return_value = chat
    service = GeminiIdeaService(model="m", client=client)

    session = await service.create_chat("Title", "Description")
    fragments = [fragment async for fragment in session.stream("question")]

    assert fragments == ["Hi", "", " there"]
    chat.send_message_stream.assert_awaited_once_with("question")
    config = client.aio.chats.create.call_args.kwargs["config"]
    assert '"Title"' in config.system_instruction


@pytest.mark.anyio
async def test_chat_session_closes_sdk_stream_when_stopped_early():
    closed: list[bool] = []

    async def chunks():
        try:
            for text in ("one", "two", "three"):
                yield SimpleNamespace(text=text)
        finally:
            closed.append(True)

    chat = MagicMock()
    chat.send_message_stream = AsyncMock(return_value=chunks())
    client = MagicMock()
    client.aio.chats.create.return_value = chat
    service = GeminiIdeaService(model="m", client=client)

    session = await service.create_chat("Title", "Description")
    stream = session.stream("question")
    assert await stream.__anext__() == "one"
    await stream.aclose()

    assert closed == [True]
