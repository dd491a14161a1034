"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    roboflow_api_key: str | None = None
    roboflow_model: str = "food-detection-ysgqf/2"
    roboflow_base_url: str = "https://detect.roboflow.com"
    detection_timeout_seconds: float = 30.0
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_debug_environment(environment: str) -> bool:
    """Return true when error responses may include debug details."""
    return environment.strip().lower() in {"local", "development", "dev"}
