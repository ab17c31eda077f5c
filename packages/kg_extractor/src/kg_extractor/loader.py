"""Чтение YAML-файла с профилями извлечения."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml

from .config import DEFAULT_PROFILE, ExtractionConfig, ExtractionProfile


@lru_cache
def load_extraction_config(path: str | Path) -> ExtractionConfig:
    """Собирает ExtractionConfig из YAML вида ``profiles: {name: {...}}``.

    Встроенный профиль ``default`` остаётся доступен, если файл не задаёт
    собственный профиль с тем же именем. Пустой файл даёт только его.

    Raises:
        FileNotFoundError: Если файл отсутствует.
        ValueError: Если YAML не разбирается или профили описаны неверно
            (pydantic ValidationError тоже наследует ValueError).
    """

    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Extraction profiles not found: {file_path}") from exc

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Extraction profiles {file_path} are not valid YAML: {exc}") from exc

    document = document or {}
    declared = document.get("profiles") if isinstance(document, dict) else None
    if not isinstance(document, dict) or not isinstance(declared or {}, dict):
        raise ValueError(f"Extraction profiles {file_path} must map profile names to settings")

    profiles = {DEFAULT_PROFILE: ExtractionProfile().model_dump(), **(declared or {})}
    return ExtractionConfig.model_validate({"profiles": profiles})
