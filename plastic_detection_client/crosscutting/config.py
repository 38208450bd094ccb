"""Application configuration loading helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Runtime configuration for the detection client.

    Values come from environment variables with the ``PDC_`` prefix (or a local
    ``.env`` file); explicit overrides passed to :func:`load_settings` win.
    """

    model_config = SettingsConfigDict(env_prefix="PDC_", env_file=".env", extra="ignore")

    service_url: str = "http://127.0.0.1:5000"
    detect_path: str = "/detect"
    upload_field: str = "image"
    request_timeout: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"
    log_json: bool = False
    preview_dir: Path | None = None
    page_title: str = "Plastic Detection System"

    @field_validator("service_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("detect_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def detect_url(self) -> str:
        return f"{self.service_url}{self.detect_path}"


def load_settings(**overrides: Any) -> ClientSettings:
    """Load configuration values from the environment, skipping ``None`` overrides."""

    return ClientSettings(**{key: value for key, value in overrides.items() if value is not None})


__all__ = ["ClientSettings", "load_settings"]
