from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite:///./app.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Career Assessment API"
    app_env: str = "dev"
    log_level: str = "info"

    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    data_dir: str | None = None
    cors_origins: list[str] = Field(default_factory=lambda: [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    llm_enabled: bool = True
    llm_provider: str = "openai"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    gemini_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.4
    llm_timeout_seconds: int = 25
    llm_prompt_version: str = "v1"

    explanation_deadline_seconds: float = 30.0

    def sqlalchemy_url(self) -> str:
        """An explicit DATABASE_URL wins; otherwise the SQLite file lives in `data_dir` when one is set."""
        configured = (self.database_url or "").strip() or DEFAULT_DATABASE_URL
        if configured != DEFAULT_DATABASE_URL or not self.data_dir:
            return configured

        data_dir = Path(self.data_dir).expanduser()
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{(data_dir / 'app.db').resolve()}"


settings = Settings()
