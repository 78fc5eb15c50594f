"""Tests for the generation client and the Gemini LLM wrapper."""

import asyncio
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from google.genai import errors as genai_errors

from briefsmith.core.client import GenerationClient
from briefsmith.core.errors import BackendError, MalformedResponseError, TransportError
from briefsmith.core.llm import GeminiLLM, get_llm
from briefsmith.schemas import OutputContract, get_schema


@pytest.mark.asyncio
async def test_execute_returns_raw_text(fake_llm):
    fake_llm.ainvoke.return_value = '```json\n{"a": 1}\n```'
    client = GenerationClient(llm=fake_llm)

    raw = await client.execute("instruction", OutputContract.VIDEO_PROMPT)

    assert raw == '```json\n{"a": 1}\n```'
    fake_llm.ainvoke.assert_awaited_once_with(
        "instruction", response_schema="video_prompt", low_latency=False
    )


@pytest.mark.asyncio
async def test_execute_plain_text_has_no_schema(fake_llm):
    client = GenerationClient(llm=fake_llm)

    await client.execute("suggest", OutputContract.PLAIN_TEXT, low_latency=True)

    fake_llm.ainvoke.assert_awaited_once_with("suggest", response_schema=None, low_latency=True)


@pytest.mark.asyncio
async def test_backend_rejection_maps_to_backend_error(fake_llm):
    fake_llm.ainvoke.side_effect = genai_errors.ClientError(
        400, {"error": {"code": 400, "message": "Invalid argument", "status": "INVALID_ARGUMENT"}}
    )
    client = GenerationClient(llm=fake_llm)

    with pytest.raises(BackendError) as exc_info:
        await client.execute("instruction", OutputContract.VIDEO_PROMPT)
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
    ConnectionResetError("reset"),
    asyncio.TimeoutError(),
])
async def test_unreachable_backend_maps_to_transport_error(fake_llm, error):
    fake_llm.ainvoke.side_effect = error
    client = GenerationClient(llm=fake_llm)

    with pytest.raises(TransportError):
        await client.execute("instruction", OutputContract.PLAIN_TEXT)


@pytest.mark.asyncio
async def test_unexpected_failure_maps_to_backend_error(fake_llm):
    fake_llm.ainvoke.side_effect = RuntimeError("quota exceeded")
    client = GenerationClient(llm=fake_llm)

    with pytest.raises(BackendError) as exc_info:
        await client.execute("instruction", OutputContract.PLAIN_TEXT)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_pipeline_errors_pass_through(fake_llm):
    fake_llm.ainvoke.side_effect = MalformedResponseError("bad", raw_text="x")
    client = GenerationClient(llm=fake_llm)

    with pytest.raises(MalformedResponseError):
        await client.execute("instruction", OutputContract.PLAIN_TEXT)


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["", "   \n", None])
async def test_empty_response_is_backend_error(fake_llm, raw):
    fake_llm.ainvoke.return_value = raw
    client = GenerationClient(llm=fake_llm)

    with pytest.raises(BackendError):
        await client.execute("instruction", OutputContract.PLAIN_TEXT)


class TestGeminiLLM:
    def test_get_llm_ignores_model_override(self):
        llm = get_llm(model="gpt-4", client=Mock())
        assert isinstance(llm, GeminiLLM)
        assert llm.model_name != "gpt-4"

    def test_low_latency_disables_thinking(self):
        config = GeminiLLM(client=Mock()).build_config(low_latency=True)
        assert config.thinking_config.thinking_budget == 0
        assert config.response_mime_type is None

    def test_default_call_keeps_full_depth(self):
        config = GeminiLLM(client=Mock()).build_config()
        assert config.thinking_config is None
        assert config.temperature == 1.0

    def test_schema_enables_json_mode(self):
        config = GeminiLLM(client=Mock()).build_config(response_schema="video_prompt")
        assert config.response_mime_type == "application/json"
        assert config.response_schema is not None

    def test_unknown_schema_rejected(self):
        with pytest.raises(ValueError):
            get_schema("storyboard")

    @pytest.mark.asyncio
    async def test_async_call_uses_aio_client(self):
        fake_client = Mock()
        fake_client.aio.models.generate_content = AsyncMock(return_value=Mock(text='"Neon noir"'))
        llm = GeminiLLM(client=fake_client, model_name="gemini-test")

        text = await llm._acall("suggest a style", low_latency=True)

        assert text == '"Neon noir"'
        kwargs = fake_client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "suggest a style"
        assert kwargs["config"].thinking_config.thinking_budget == 0

    @pytest.mark.asyncio
    async def test_async_call_empty_text(self):
        fake_client = Mock()
        fake_client.aio.models.generate_content = AsyncMock(return_value=Mock(text=None))
        llm = GeminiLLM(client=fake_client)

        assert await llm._acall("prompt", response_schema="dialogue_suggestion") == ""
