import json
from types import SimpleNamespace

import httpx
import pytest

from app.config import settings
from app.services.llm.client import GeminiLLMClient, LLMClientError, parse_json_payload
from app.services.llm.factory import LLMConfig, get_llm_client, load_llm_config
from app.services.llm.openai_client import OpenAILLMClient


def _config(**overrides):
    values = {
        "llm_enabled": True,
        "provider": "openai",
        "model": "gpt-4o-mini",
        "temperature": 0.2,
        "timeout_seconds": 5,
        "prompt_version": "v1",
        "openai_base_url": None,
        "api_key": "fake-key",
    }
    values.update(overrides)
    return LLMConfig(**values)


def test_factory_returns_openai_client_for_openai_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "llm_enabled", True)
    monkeypatch.setattr(settings, "openai_api_key", "fake-openai-key")
    monkeypatch.setattr(settings, "llm_model", "gpt-4o-mini")

    client = get_llm_client()
    assert isinstance(client, OpenAILLMClient)
    assert client.enabled is True


def test_factory_returns_gemini_client_for_gemini_provider():
    client = get_llm_client(_config(provider="google_gemini", model="gemini-2.0-flash"))

    assert isinstance(client, GeminiLLMClient)
    assert client.enabled is True
    assert client.api_key == "fake-key"


def test_unknown_provider_falls_back_to_openai(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "Anthropic")

    assert load_llm_config().provider == "openai"


def test_config_picks_key_for_selected_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "google_gemini")
    monkeypatch.setattr(settings, "openai_api_key", "openai-key")
    monkeypatch.setattr(settings, "gemini_api_key", "  gemini-key  ")

    assert load_llm_config().api_key == "gemini-key"


def test_client_is_disabled_without_key_even_if_settings_have_one(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "settings-key")

    client = get_llm_client(_config(api_key=None))
    assert client.enabled is False


def test_client_is_disabled_when_llm_turned_off():
    assert get_llm_client(_config(llm_enabled=False)).enabled is False


def test_disabled_client_refuses_to_call():
    client = get_llm_client(_config(llm_enabled=False))

    with pytest.raises(LLMClientError):
        client.generate_json("system", "user")


def _patch_httpx(monkeypatch, handler):
    real_client = httpx.Client

    def client_factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", client_factory)


def test_gemini_client_posts_prompts_and_parses_json(monkeypatch):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        text = '```json\n{"executiveSummary": "Hello"}\n```'
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})

    _patch_httpx(monkeypatch, handler)
    client = get_llm_client(_config(provider="google_gemini", model="gemini-2.0-flash"))

    result = client.generate_json("be concise", "explain this")

    assert result == {"executiveSummary": "Hello"}
    assert seen["url"].endswith("/models/gemini-2.0-flash:generateContent")
    assert seen["key"] == "fake-key"
    assert seen["body"]["systemInstruction"]["parts"][0]["text"] == "be concise"
    assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"


def test_gemini_client_maps_http_errors(monkeypatch):
    _patch_httpx(monkeypatch, lambda request: httpx.Response(500, text="upstream down"))
    client = get_llm_client(_config(provider="google_gemini", model="gemini-2.0-flash"))

    with pytest.raises(LLMClientError, match="HTTP 500"):
        client.generate_json("system", "user")


def test_gemini_client_rejects_empty_candidates(monkeypatch):
    _patch_httpx(monkeypatch, lambda request: httpx.Response(200, json={"candidates": []}))
    client = get_llm_client(_config(provider="google_gemini", model="gemini-2.0-flash"))

    with pytest.raises(LLMClientError):
        client.generate_json("system", "user")


def test_openai_client_requests_json_object(monkeypatch):
    captured = {}

    class FakeCompletions:
        def create(self, **kwargs):
            captured.update(kwargs)
            message = SimpleNamespace(content='{"executiveSummary": "Hi"}')
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    class FakeOpenAI:
        def __init__(self, **kwargs):
            captured["client_kwargs"] = kwargs
            self.chat = SimpleNamespace(completions=FakeCompletions())

    monkeypatch.setattr("app.services.llm.openai_client.OpenAI", FakeOpenAI)

    result = get_llm_client(_config()).generate_json("system", "user")

    assert result == {"executiveSummary": "Hi"}
    assert captured["response_format"] == {"type": "json_object"}
    assert captured["messages"][0] == {"role": "system", "content": "system"}
    assert captured["client_kwargs"]["max_retries"] == 0


def test_parse_json_payload_handles_wrapped_and_invalid_text():
    assert parse_json_payload('{"a": 1}') == {"a": 1}
    assert parse_json_payload('Sure! {"a": 1} Hope it helps.') == {"a": 1}
    assert parse_json_payload("[1, 2, 3]") is None
    assert parse_json_payload("no json here") is None
    assert parse_json_payload("") is None
