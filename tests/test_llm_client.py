import asyncio
import json

import httpx
import pytest

from framework.llm.client import GroqChatClient, build_chat_payload, first_choice_content
from framework.llm.config import DEFAULT_MODEL, GroqConfig
from framework.llm.errors import LLMCancelledError, LLMConfigurationError, LLMProviderError
from workflows.repair_guide.v1.nodes.dispatch import SYSTEM_PROMPT, build_messages, dispatch


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(handler, **config_overrides):
    config = GroqConfig(api_key="test-key", **config_overrides)
    return GroqChatClient(config, transport=httpx.MockTransport(handler))


def test_config_from_env_requires_api_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(LLMConfigurationError, match="GROQ_API_KEY"):
        GroqConfig.from_env()

    monkeypatch.setenv("GROQ_API_KEY", "   ")
    with pytest.raises(LLMConfigurationError):
        GroqConfig.from_env()


def test_config_from_env_defaults_and_overrides(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "abc")
    for name in ("GROQ_BASE_URL", "GROQ_MODEL_NAME", "GROQ_TEMPERATURE",
                 "GROQ_MAX_OUTPUT_TOKENS", "GROQ_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)

    config = GroqConfig.from_env()
    assert config.api_key == "abc"
    assert config.model_name == DEFAULT_MODEL
    assert config.temperature == 0.8
    assert config.max_output_tokens == 8000
    assert config.timeout_s is None
    assert config.chat_completions_url == "https://api.groq.com/openai/v1/chat/completions"

    monkeypatch.setenv("GROQ_MODEL_NAME", "llama-3.1-8b-instant")
    monkeypatch.setenv("GROQ_TIMEOUT_S", "12.5")
    monkeypatch.setenv("GROQ_BASE_URL", "http://localhost:9000/v1/")
    config = GroqConfig.from_env()
    assert config.model_name == "llama-3.1-8b-instant"
    assert config.timeout_s == 12.5
    assert config.chat_completions_url == "http://localhost:9000/v1/chat/completions"


def test_client_rejects_blank_api_key():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        return httpx.Response(200, json=_completion("{}"))

    with pytest.raises(LLMConfigurationError):
        GroqChatClient(GroqConfig(api_key=""), transport=httpx.MockTransport(handler))
    assert calls["n"] == 0


def test_build_chat_payload_uses_config_defaults():
    config = GroqConfig(api_key="k")
    payload = build_chat_payload(config, build_messages("brakes squeal"))

    assert payload["model"] == DEFAULT_MODEL
    assert payload["temperature"] == 0.8
    assert payload["max_tokens"] == 8000
    assert payload["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert build_chat_payload(config, [], model="other")["model"] == "other"


def test_first_choice_content_falls_back_to_empty_object():
    assert first_choice_content(_completion('  {"overview": "x"}\n')) == '{"overview": "x"}'
    assert first_choice_content(_completion(None)) == "{}"
    assert first_choice_content(_completion("   ")) == "{}"
    assert first_choice_content({"choices": []}) == "{}"
    assert first_choice_content({}) == "{}"
    assert first_choice_content(None) == "{}"


def test_system_prompt_keeps_instruction_wording():
    assert "obuddy5000" in SYSTEM_PROMPT
    assert '"diagnostic_steps"' in SYSTEM_PROMPT
    assert '"videos": []' in SYSTEM_PROMPT
    assert "Your job: create **extremely detailed, beginner-friendly repair guides**." in SYSTEM_PROMPT
    assert "must be a **full paragraph (minimum 3\u20135 sentences)**" in SYSTEM_PROMPT
    assert "- Provide **manual-style instructions**:" in SYSTEM_PROMPT
    assert '  "diagnostic_steps": string[],' in SYSTEM_PROMPT
    assert SYSTEM_PROMPT.startswith("\nYou are obuddy5000, a professional auto mechanic assistant.\n")
    assert SYSTEM_PROMPT.endswith('  "videos": []\n}\n')


@pytest.mark.asyncio
async def test_dispatch_sends_expected_request():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["method"] = request.method
        seen["auth"] = request.headers.get("Authorization")
        seen["content_type"] = request.headers.get("Content-Type")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('  {"overview": "Check the battery."}  '))

    raw = await dispatch("car will not start", client=_client(handler))

    assert raw == '{"overview": "Check the battery."}'
    assert seen["method"] == "POST"
    assert seen["url"] == "https://api.groq.com/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer test-key"
    assert seen["content_type"] == "application/json"
    body = seen["body"]
    assert body["model"] == DEFAULT_MODEL
    assert body["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "car will not start"},
    ]
    assert body["temperature"] == 0.8
    assert body["max_tokens"] == 8000
    assert body["response_format"] == {"type": "json_object"}


@pytest.mark.asyncio
async def test_dispatch_forwards_model_and_empty_prompt():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("{}"))

    await dispatch("", model="mixtral-8x7b-32768", client=_client(handler))

    assert seen["body"]["model"] == "mixtral-8x7b-32768"
    assert seen["body"]["messages"][1] == {"role": "user", "content": ""}


@pytest.mark.asyncio
async def test_dispatch_returns_empty_object_when_content_missing():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {}}]})

    assert await dispatch("noise", client=_client(handler)) == "{}"


@pytest.mark.asyncio
async def test_dispatch_without_api_key_makes_no_request(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    calls = {"n": 0}

    async def fake_send(self, request, **kwargs):
        calls["n"] += 1
        return httpx.Response(200, json=_completion("{}"), request=request)

    monkeypatch.setattr(httpx.AsyncClient, "send", fake_send)

    with pytest.raises(LLMConfigurationError):
        await dispatch("engine misfire")
    assert calls["n"] == 0


@pytest.mark.asyncio
async def test_dispatch_reads_api_key_from_env(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "env-key")
    seen = {}

    async def fake_send(self, request, **kwargs):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=_completion('{"overview": "ok"}'), request=request)

    monkeypatch.setattr(httpx.AsyncClient, "send", fake_send)

    assert await dispatch("engine misfire") == '{"overview": "ok"}'
    assert seen["auth"] == "Bearer env-key"


@pytest.mark.asyncio
async def test_dispatch_raises_provider_error_with_status_and_body():
    def handler(request):
        return httpx.Response(500, text="upstream exploded")

    with pytest.raises(LLMProviderError) as excinfo:
        await dispatch("overheating", client=_client(handler))

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == "upstream exploded"
    assert "500" in str(excinfo.value)
    assert "upstream exploded" in str(excinfo.value)


@pytest.mark.asyncio
async def test_dispatch_rejects_non_json_success_body():
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(LLMProviderError) as excinfo:
        await dispatch("overheating", client=_client(handler))
    assert excinfo.value.status_code == 200


@pytest.mark.asyncio
async def test_dispatch_propagates_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await dispatch("overheating", client=_client(handler))


@pytest.mark.asyncio
async def test_dispatch_with_already_cancelled_signal_sends_nothing():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        return httpx.Response(200, json=_completion("{}"))

    cancellation = asyncio.Event()
    cancellation.set()

    with pytest.raises(LLMCancelledError):
        await dispatch("rough idle", cancellation=cancellation, client=_client(handler))
    assert calls["n"] == 0


@pytest.mark.asyncio
async def test_dispatch_cancelled_while_in_flight():
    started = asyncio.Event()

    async def handler(request):
        started.set()
        await asyncio.sleep(30)
        return httpx.Response(200, json=_completion("{}"))

    cancellation = asyncio.Event()

    async def fire_when_started():
        await started.wait()
        cancellation.set()

    trigger = asyncio.ensure_future(fire_when_started())
    with pytest.raises(LLMCancelledError):
        await asyncio.wait_for(
            dispatch("rough idle", cancellation=cancellation, client=_client(handler)),
            timeout=5,
        )
    await trigger


@pytest.mark.asyncio
async def test_dispatch_with_unfired_signal_returns_normally():
    def handler(request):
        return httpx.Response(200, json=_completion('{"overview": "fine"}'))

    cancellation = asyncio.Event()
    raw = await dispatch("rough idle", cancellation=cancellation, client=_client(handler))
    assert raw == '{"overview": "fine"}'
