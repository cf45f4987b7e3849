"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = "https://api.resonite.com"
    http_timeout_seconds: float = 30.0
    user_agent: str = _DEFAULT_USER_AGENT
    screens_record_name: str = "Screens"
    screens_record_path: str = "Workspaces\\Private\\RadiantDash"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="RESONITE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
