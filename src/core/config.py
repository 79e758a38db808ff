"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Runner, escenarios y `doctor` leen la misma URL base y los mismos timeouts.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def get_user_config_dir() -> Path:
    """Per-user config directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sources-probe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sources-probe"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sources-probe"
    return Path.home() / ".config" / "sources-probe"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class ProbeSettings(BaseSettings):
    """Settings for a probe run.

    Precedence: explicit keyword arguments (CLI flags), then `SOURCES_PROBE_*`
    environment variables, then the project `.env`, then the user `.env`
    (pydantic-settings lets later `env_file` entries override earlier ones).
    """

    model_config = SettingsConfigDict(
        env_prefix="SOURCES_PROBE_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:8228",
        min_length=8,
        description="Base URL of the server exposing /api/sources_manage.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="sources-probe/0.1",
        min_length=1,
        description="User-Agent sent with every probe request.",
    )
    settle_seconds: float = Field(
        default=1.0,
        ge=0,
        le=60,
        description="Fixed wait between a write and the read that checks it.",
    )
    body_preview_chars: int = Field(
        default=200,
        ge=1,
        description="Raw text bodies are cut to this many characters in the transcript.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Level for the Rich logging handler.",
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid base_url: {exc}") from exc
        if not url.host:
            raise ValueError("base_url has no host")
        if url.port is not None and not 0 < url.port <= 65535:
            raise ValueError(f"base_url port out of range: {url.port}")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
