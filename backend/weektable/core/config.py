"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Weektable Backend"
    debug: bool = False
    log_level: str = "INFO"
    scheduling_log_level: str | None = None
    default_wake_hour: int = 7
    default_bed_hour: int = 22
    fallback_start_hour: int = 8
    fallback_end_hour: int = 21
    schedule_seed: int | None = None
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "weektable"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
