from __future__ import annotations

from dataclasses import dataclass

from app.config import Settings, settings
from app.services.llm.client import GeminiLLMClient
from app.services.llm.openai_client import OpenAILLMClient

SUPPORTED_PROVIDERS = {"openai", "google_gemini"}


@dataclass(frozen=True)
class LLMConfig:
    llm_enabled: bool
    provider: str
    model: str
    temperature: float
    timeout_seconds: int
    prompt_version: str
    openai_base_url: str | None
    api_key: str | None


def load_llm_config(source: Settings | None = None) -> LLMConfig:
    cfg = source or settings

    provider = str(cfg.llm_provider or "openai").strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        provider = "openai"

    api_key = cfg.openai_api_key if provider == "openai" else cfg.gemini_api_key
    openai_base_url = (cfg.openai_base_url or "").strip() or None

    return LLMConfig(
        llm_enabled=bool(cfg.llm_enabled),
        provider=provider,
        model=str(cfg.llm_model or "").strip(),
        temperature=float(cfg.llm_temperature),
        timeout_seconds=max(int(cfg.llm_timeout_seconds), 1),
        prompt_version=str(cfg.llm_prompt_version or "v1").strip() or "v1",
        openai_base_url=openai_base_url,
        api_key=(api_key or "").strip() or None,
    )


def get_llm_client(config: LLMConfig | None = None):
    cfg = config or load_llm_config()

    if cfg.provider == "google_gemini":
        return GeminiLLMClient(
            api_key=cfg.api_key or "",
            model=cfg.model,
            temperature=cfg.temperature,
            timeout_seconds=cfg.timeout_seconds,
            provider=cfg.provider,
            llm_enabled=cfg.llm_enabled,
        )

    return OpenAILLMClient(
        api_key=cfg.api_key or "",
        base_url=cfg.openai_base_url or "",
        model=cfg.model,
        temperature=cfg.temperature,
        timeout_seconds=cfg.timeout_seconds,
        provider=cfg.provider,
        llm_enabled=cfg.llm_enabled,
    )
