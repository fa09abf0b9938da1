"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "IMPROVE Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "postgresql+psycopg2://improve@localhost:5432/improve"
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "improve"
    gemini_api_key: str | None = None
    ai_model: str = "gemini-flash-latest"
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_timeout_seconds: float = 60.0


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
