"""Вспомогательные функции для инициализации экстрактора."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import ExtractionConfig
from .exceptions import ExtractionError
from .gateway import KnowledgeGraphExtractor
from .loader import load_extraction_config
from .providers import MultimodalProvider, OpenAIResponsesProvider
from .settings import ExtractorSettings

logger = logging.getLogger(__name__)


def create_extractor(
    settings: ExtractorSettings,
    *,
    provider: MultimodalProvider | None = None,
) -> KnowledgeGraphExtractor:
    """Создаёт экстрактор с учётом настроек и выбранного провайдера."""

    if settings.profiles_path is not None:
        config = load_extraction_config(_resolve_path(settings.profiles_path))
    else:
        config = ExtractionConfig.default()

    try:
        profile = config.require_profile(settings.profile)
    except KeyError as exc:
        raise ExtractionError(f"Unknown profile: {settings.profile}", cause=exc) from exc

    lm_provider = provider or _create_provider(settings)

    return KnowledgeGraphExtractor(provider=lm_provider, profile=profile, max_retries=settings.max_retries)


def _create_provider(settings: ExtractorSettings) -> MultimodalProvider:
    api_key = settings.openai_api_key or os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ExtractionError("OpenAI API key is not set (KG_EXTRACTOR_OPENAI_API_KEY or OPENAI_API_KEY).")
    logger.debug(
        "Initialising OpenAIResponsesProvider model=%s timeout=%s",
        settings.openai_model,
        settings.openai_timeout,
    )
    return OpenAIResponsesProvider(
        model=settings.openai_model,
        api_key=api_key,
        timeout=settings.openai_timeout,
    )


def _resolve_path(path: Path) -> Path:
    absolute = path if path.is_absolute() else Path.cwd() / path
    return absolute.resolve()
