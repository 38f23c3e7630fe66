from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    api_base_url: str = Field("", alias="API_BASE_URL")
    api_key: str = Field("", alias="API_KEY")

    timezone: str = Field("America/Sao_Paulo", alias="DASHBOARD_TIMEZONE")
    request_timeout: int = Field(10, alias="API_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
