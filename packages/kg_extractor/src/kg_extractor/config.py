from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

DEFAULT_PROFILE = "default"


class ExtractionProfile(BaseModel):
    """Параметры конкретного профиля извлечения."""

    temperature: Annotated[float, Field(ge=0.0, le=2.0)] = 0.2
    max_output_tokens: Annotated[int, Field(ge=256, le=32768)] = 8192
    instructions: str | None = None


class ExtractionConfig(BaseModel):
    """Корневая конфигурация профилей извлечения."""

    profiles: dict[str, ExtractionProfile]

    @classmethod
    def default(cls) -> "ExtractionConfig":
        return cls(profiles={DEFAULT_PROFILE: ExtractionProfile()})

    def require_profile(self, name: str) -> ExtractionProfile:
        try:
            return self.profiles[name]
        except KeyError as exc:
            raise KeyError(f"Extraction profile '{name}' is not defined") from exc
