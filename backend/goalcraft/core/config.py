"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Goalcraft Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./goalcraft.db"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "goalcraft"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    ai_timeout_seconds: float = 30.0
    ai_enabled_by_default: bool = True
    ai_rate_limit_requests: int = 10
    ai_rate_limit_window_seconds: float = 60.0
    notifications_enabled: bool = False
    notifications_provider: str = "noop"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
