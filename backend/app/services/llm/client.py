from __future__ import annotations

import json
import re
from typing import Any

import httpx

from app.config import settings

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class LLMClientError(RuntimeError):
    pass


class GeminiLLMClient:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        timeout_seconds: int | None = None,
        provider: str | None = None,
        llm_enabled: bool | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model if model is not None else settings.llm_model
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.llm_timeout_seconds
        self.provider = provider if provider is not None else settings.llm_provider
        self.runtime_enabled = llm_enabled if llm_enabled is not None else settings.llm_enabled

    @property
    def enabled(self) -> bool:
        return bool(
            self.runtime_enabled
            and str(self.provider or "").strip().lower() == "google_gemini"
            and self.api_key
            and self.model
        )

    def generate_json(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        if not self.enabled:
            raise LLMClientError("LLM disabled or missing Gemini configuration")

        raw_text = self._call(system_prompt, user_prompt)
        parsed = parse_json_payload(raw_text)
        if parsed is None:
            raise LLMClientError("Gemini returned non-JSON content")
        return parsed

    def _call(self, system_prompt: str, user_prompt: str) -> str:
        url = f"{GEMINI_BASE_URL}/models/{self.model}:generateContent"
        payload = {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": user_prompt}],
                }
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
            },
        }

        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(url, json=payload, headers={"x-goog-api-key": str(self.api_key)})
            if response.status_code >= 400:
                raise LLMClientError(f"HTTP {response.status_code}: {response.text[:300]}")
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LLMClientError(str(exc) or exc.__class__.__name__) from exc

        text = _extract_text(data)
        if text is None:
            raise LLMClientError("Empty Gemini candidate text")
        return text


def _extract_text(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None

    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None

    parts = content.get("parts")
    if not isinstance(parts, list):
        return None

    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            return part["text"]
    return None


def parse_json_payload(raw_text: str | None) -> dict[str, Any] | None:
    if not raw_text:
        return None

    text = raw_text.strip()
    try:
        loaded = json.loads(text)
        if isinstance(loaded, dict):
            return loaded
    except json.JSONDecodeError:
        pass

    # Models sometimes wrap the object in a markdown fence or a sentence.
    match = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if not match:
        return None

    try:
        loaded = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None

    return loaded if isinstance(loaded, dict) else None
