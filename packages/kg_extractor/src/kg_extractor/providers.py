"""Мультимодальные LLM-провайдеры для извлечения графа."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Protocol, Sequence, runtime_checkable

from .exceptions import ExtractionError
from .parts import TEXT_HEADER, DocumentPart

logger = logging.getLogger(__name__)


@runtime_checkable
class MultimodalProvider(Protocol):
    """Контракт провайдера генерации по тексту и изображениям."""

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
        """Возвращает сырой JSON-текст, соответствующий схеме."""


try:  # pragma: no cover - импорт зависит от окружения
    from openai import OpenAI
except ModuleNotFoundError:  # pragma: no cover - openai не установлен
    OpenAI = None  # type: ignore[assignment]


class OpenAIResponsesProvider(MultimodalProvider):
    """Провайдер, использующий OpenAI Responses API с JSON Schema."""

    def __init__(
        self,
        *,
        model: str,
        api_key: str | None = None,
        client: Any | None = None,
        timeout: float | None = 120.0,
    ) -> None:
        if OpenAI is None and client is None:
            raise ExtractionError("OpenAI SDK is not installed or misconfigured")
        self._model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout)

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
        logger.info(
            "OpenAI extract model=%s parts=%d max_output_tokens=%d schema=%s",
            self._model,
            len(parts),
            max_output_tokens,
            schema_name,
        )
        try:
            response = self._client.responses.create(
                model=self._model,
                input=[{"role": "user", "content": build_content(instructions, parts)}],
                temperature=temperature,
                max_output_tokens=max_output_tokens,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": schema_name,
                        "schema": _normalize_schema(schema),
                    }
                },
            )
        except Exception as exc:  # pragma: no cover - требует сетевого вызова
            logger.exception("LLM provider failed")
            raise ExtractionError("LLM provider failed", cause=exc) from exc

        text = self._extract_text(response)
        if text is None or not text.strip():
            raise ExtractionError("The model returned an empty response.")
        return text

    @staticmethod
    def _extract_text(response: Any) -> str | None:
        if hasattr(response, "output_text"):
            return getattr(response, "output_text")  # type: ignore[no-any-return]
        output = getattr(response, "output", None)
        if not output:
            return None
        chunks: list[str] = []
        for item in output:
            content = getattr(item, "content", None)
            if not content:
                continue
            for chunk in content:
                text = getattr(chunk, "text", None)
                if text:
                    chunks.append(text)
        if chunks:
            return "".join(chunks)
        return None


def build_content(instructions: str, parts: Sequence[DocumentPart]) -> list[dict[str, Any]]:
    """Собирает содержимое запроса: инструкция, затем тексты, затем изображения."""

    content: list[dict[str, Any]] = [{"type": "input_text", "text": instructions}]
    content.extend({"type": "input_text", "text": f"{TEXT_HEADER}{part.text}"} for part in parts if part.is_text)
    content.extend({"type": "input_image", "image_url": part.data_url()} for part in parts if part.is_image)
    return content


def _normalize_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Приводит схему к требованиям Responses API (все поля в required)."""

    def _walk(node: Any) -> Any:
        if isinstance(node, dict):
            node.pop("$schema", None)
            if node.get("type") == "object":
                props = node.get("properties")
                if isinstance(props, dict) and props:
                    node["required"] = list(props.keys())
                    for value in props.values():
                        _walk(value)
            if "items" in node:
                _walk(node["items"])
        return node

    return _walk(deepcopy(schema))
