from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator, Sequence

import pytest
from pydantic import ValidationError

from kg_extractor import (
    DocumentPart,
    ExtractionError,
    ExtractorSettings,
    create_extractor,
    load_extraction_config,
)
from kg_extractor.providers import MultimodalProvider


class StubProvider(MultimodalProvider):
    def __init__(self, payload: str) -> None:
        self._payload = payload
        self.max_output_tokens: int | None = None

    def generate(
        self,
        *,
        instructions: str,
        parts: Sequence[DocumentPart],
        temperature: float,
        max_output_tokens: int,
        schema: dict[str, Any],
        schema_name: str,
    ) -> str:
        self.max_output_tokens = max_output_tokens
        return self._payload


@pytest.fixture(autouse=True)
def reset_cache() -> Iterator[None]:
    load_extraction_config.cache_clear()
    yield
    load_extraction_config.cache_clear()


def _write_profiles(path: Path) -> None:
    path.write_text(
        """
profiles:
  datasheet:
    temperature: 0.1
    max_output_tokens: 4096
""",
        encoding="utf-8",
    )


def test_load_extraction_config(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    _write_profiles(config_path)

    config = load_extraction_config(config_path)

    assert config.require_profile("datasheet").max_output_tokens == 4096
    with pytest.raises(KeyError):
        config.require_profile("missing")


def test_load_extraction_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    config_path.write_text("- just a list", encoding="utf-8")

    with pytest.raises(ValueError):
        load_extraction_config(config_path)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KG_EXTRACTOR_OPENAI_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("KG_EXTRACTOR_MAX_RETRIES", "5")

    settings = ExtractorSettings()

    assert settings.openai_model == "gpt-4.1-mini"
    assert settings.max_retries == 5


def test_settings_validate_bounds() -> None:
    with pytest.raises(ValidationError):
        ExtractorSettings(openai_timeout=0.5)


def test_create_extractor_with_stub_provider(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_profiles(tmp_path / "profiles.yaml")
    monkeypatch.chdir(tmp_path)
    provider = StubProvider(json.dumps({"nodes": [], "relationships": []}))

    settings = ExtractorSettings(profiles_path=Path("profiles.yaml"), profile="datasheet", max_retries=0)
    extractor = create_extractor(settings, provider=provider)
    graph = extractor.extract([DocumentPart.plain_text("empty page")])

    assert graph.is_empty
    assert provider.max_output_tokens == 4096


def test_create_extractor_unknown_profile(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    _write_profiles(config_path)
    settings = ExtractorSettings(profiles_path=config_path, profile="nope")

    with pytest.raises(ExtractionError, match="Unknown profile"):
        create_extractor(settings, provider=StubProvider("{}"))


def test_create_extractor_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("KG_EXTRACTOR_OPENAI_API_KEY", raising=False)

    with pytest.raises(ExtractionError, match="API key"):
        create_extractor(ExtractorSettings())


def test_document_part_from_path(tmp_path: Path) -> None:
    text_file = tmp_path / "page.txt"
    text_file.write_text("Resistor R1", encoding="utf-8")
    image_file = tmp_path / "page.png"
    image_file.write_bytes(b"\x89PNG\r\n")

    text_part = DocumentPart.from_path(text_file)
    image_part = DocumentPart.from_path(image_file)

    assert text_part.is_text and text_part.text == "Resistor R1"
    assert image_part.is_image and image_part.mime_type == "image/png"


def test_document_part_requires_exactly_one_payload() -> None:
    with pytest.raises(ValidationError):
        DocumentPart(mime_type="text/plain")
    with pytest.raises(ValidationError):
        DocumentPart(mime_type="text/plain", text="a", data=b"a")


def test_builtin_default_profile_survives_loading(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    _write_profiles(config_path)

    config = load_extraction_config(config_path)

    assert config.require_profile("default").temperature == 0.2
    assert set(config.profiles) == {"default", "datasheet"}


def test_load_extraction_config_rejects_broken_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    config_path.write_text("profiles: {datasheet: [unclosed", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid YAML"):
        load_extraction_config(config_path)


def test_load_extraction_config_rejects_invalid_profile(tmp_path: Path) -> None:
    config_path = tmp_path / "profiles.yaml"
    config_path.write_text("profiles:\n  hot:\n    temperature: 9\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_extraction_config(config_path)
