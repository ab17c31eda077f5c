"""Извлечение графа знаний из частей документа через LLM-провайдера."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, Union, runtime_checkable

import jsonschema
from pydantic import ValidationError

from kg_cypher import GraphData

from .config import ExtractionProfile
from .exceptions import ExtractionError, NoDocumentPartsError
from .parts import DocumentPart
from .providers import MultimodalProvider
from .schema import EXTRACTION_INSTRUCTIONS, KNOWLEDGE_GRAPH_SCHEMA, SCHEMA_NAME

logger = logging.getLogger(__name__)

NO_PARTS_MESSAGE = "No valid document files provided. Please upload images or text files."
INVALID_PAYLOAD_MESSAGE = "The model returned an invalid data structure. Please try again."


@runtime_checkable
class ExtractionGateway(Protocol):
    """Внешний коллаборатор: превращает части документа в GraphData или падает."""

    def extract(self, parts: Sequence[DocumentPart]) -> GraphData:
        """Возвращает граф либо поднимает ExtractionError."""


@dataclass(frozen=True)
class EmptyExtraction:
    """Модель ответила корректно, но ничего не нашла."""


@dataclass(frozen=True)
class PopulatedExtraction:
    graph: GraphData


@dataclass(frozen=True)
class FailedExtraction:
    reason: str
    error: ExtractionError | None = None


ExtractionOutcome = Union[EmptyExtraction, PopulatedExtraction, FailedExtraction]


def extract_outcome(gateway: ExtractionGateway, parts: Sequence[DocumentPart]) -> ExtractionOutcome:
    """Вызывает шлюз и раскладывает результат по трём исходам."""

    try:
        graph = gateway.extract(parts)
    except ExtractionError as exc:
        return FailedExtraction(reason=str(exc), error=exc)
    except Exception as exc:
        logger.exception("Extraction gateway failed unexpectedly")
        return FailedExtraction(reason=str(exc) or type(exc).__name__)
    if graph.is_empty:
        return EmptyExtraction()
    return PopulatedExtraction(graph=graph)


class KnowledgeGraphExtractor:
    """Запрос к мультимодальной модели с JSON Schema-валидацией и ретраями."""

    def __init__(
        self,
        *,
        provider: MultimodalProvider,
        profile: ExtractionProfile | None = None,
        max_retries: int = 2,
    ) -> None:
        self._provider = provider
        self._profile = profile or ExtractionProfile()
        self._max_retries = max(0, max_retries)

    def extract(self, parts: Sequence[DocumentPart]) -> GraphData:
        usable = [part for part in parts if part.is_image or part.is_text]
        if not usable:
            raise NoDocumentPartsError(NO_PARTS_MESSAGE)
        if len(usable) < len(parts):
            logger.info("Ignoring %d unsupported document part(s)", len(parts) - len(usable))

        instructions = self._profile.instructions or EXTRACTION_INSTRUCTIONS
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            issue = last_error or Exception("previous attempt failed")
            attempt_instructions = instructions if attempt == 0 else self._augment_instructions(instructions, issue)

            try:
                raw = self._provider.generate(
                    instructions=attempt_instructions,
                    parts=usable,
                    temperature=self._profile.temperature,
                    max_output_tokens=self._profile.max_output_tokens,
                    schema=KNOWLEDGE_GRAPH_SCHEMA,
                    schema_name=SCHEMA_NAME,
                )
            except ExtractionError as exc:
                logger.error("Provider failed on attempt %d: %s", attempt + 1, exc)
                raise ExtractionError(f"The model provider failed: {exc}", cause=exc) from exc

            try:
                payload = json.loads(raw.strip())
            except ValueError as exc:
                last_error = exc
                logger.warning("Model response is not valid JSON (attempt=%d): %s", attempt + 1, exc)
                continue

            try:
                jsonschema.validate(instance=payload, schema=KNOWLEDGE_GRAPH_SCHEMA)
            except jsonschema.ValidationError as exc:
                last_error = exc
                logger.warning("Model response failed JSON Schema validation (attempt=%d): %s", attempt + 1, exc.message)
                continue

            try:
                graph = GraphData.model_validate(payload)
            except ValidationError as exc:
                last_error = exc
                logger.warning("Model response is not a valid graph (attempt=%d): %s", attempt + 1, exc)
                continue

            logger.info(
                "Extracted graph nodes=%d relationships=%d attempt=%d",
                len(graph.nodes),
                len(graph.relationships),
                attempt + 1,
            )
            return graph

        raise ExtractionError(INVALID_PAYLOAD_MESSAGE, cause=last_error)

    @staticmethod
    def _augment_instructions(instructions: str, issue: Exception) -> str:
        hint = (
            "The answer must strictly follow the JSON Schema. "
            "Return only valid JSON without any commentary. "
            f"Previous attempt error: {issue}."
        )
        return f"{instructions}\n\n{hint}"
