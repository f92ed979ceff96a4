from __future__ import annotations

from typing import Any

from openai import APIConnectionError, APIError, APIStatusError, APITimeoutError, OpenAI

from app.config import settings
from app.services.llm.client import LLMClientError, parse_json_payload


class OpenAILLMClient:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        timeout_seconds: int | None = None,
        provider: str | None = None,
        llm_enabled: bool | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = base_url if base_url is not None else settings.openai_base_url
        self.model = model if model is not None else settings.llm_model
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.llm_timeout_seconds
        self.provider = provider if provider is not None else settings.llm_provider
        self.runtime_enabled = llm_enabled if llm_enabled is not None else settings.llm_enabled

    @property
    def enabled(self) -> bool:
        return bool(
            self.runtime_enabled
            and str(self.provider or "").strip().lower() == "openai"
            and self.api_key
            and self.model
        )

    def generate_json(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        if not self.enabled:
            raise LLMClientError("LLM disabled or missing OpenAI configuration")

        raw_text = self._call(system_prompt, user_prompt)
        parsed = parse_json_payload(raw_text)
        if parsed is None:
            raise LLMClientError("OpenAI returned non-JSON content")
        return parsed

    def _call(self, system_prompt: str, user_prompt: str) -> str:
        client = OpenAI(
            api_key=self.api_key,
            base_url=self.base_url or None,
            timeout=self.timeout_seconds,
            max_retries=0,
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except APIStatusError as exc:
            status_code = getattr(exc, "status_code", None)
            body = str(exc)
            raise LLMClientError(f"HTTP {status_code}: {body[:300]}" if status_code else body[:300]) from exc
        except (APITimeoutError, APIConnectionError) as exc:
            raise LLMClientError(str(exc)) from exc
        except APIError as exc:
            raise LLMClientError(str(exc)) from exc

        text = _extract_text(response)
        if text is None:
            raise LLMClientError("Empty OpenAI response text")
        return text


def _extract_text(response: Any) -> str | None:
    choices = getattr(response, "choices", None)
    if not choices:
        return None

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, str) and content.strip():
        return content
    return None
