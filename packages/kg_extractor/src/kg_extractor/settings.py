"""Настройки для инициализации экстрактора графа."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import DEFAULT_PROFILE


class ExtractorSettings(BaseSettings):
    """Параметры запуска экстрактора графа знаний.

    Читаются из переменных окружения с префиксом ``KG_EXTRACTOR_``
    (например, ``KG_EXTRACTOR_OPENAI_MODEL``).
    """

    profiles_path: Path | None = None
    profile: str = DEFAULT_PROFILE
    openai_model: str = "gpt-4.1"
    openai_api_key: str | None = None
    openai_timeout: float = Field(default=120.0, ge=1.0)
    max_retries: int = Field(default=2, ge=0)

    model_config = SettingsConfigDict(env_prefix="KG_EXTRACTOR_", extra="ignore")
