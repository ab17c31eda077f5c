"""Извлечение графа знаний из документов через LLM и сессия обработки загрузок."""

from .config import ExtractionConfig, ExtractionProfile
from .exceptions import ExtractionError, NoDocumentPartsError, SessionBusyError
from .gateway import (
    EmptyExtraction,
    ExtractionGateway,
    ExtractionOutcome,
    FailedExtraction,
    KnowledgeGraphExtractor,
    PopulatedExtraction,
    extract_outcome,
)
from .loader import load_extraction_config
from .parts import DocumentPart
from .providers import MultimodalProvider, OpenAIResponsesProvider
from .runtime import create_extractor
from .session import ExtractionSession, SessionState, SessionStatus
from .settings import ExtractorSettings

__all__ = [
    "ExtractionConfig",
    "ExtractionProfile",
    "ExtractionError",
    "NoDocumentPartsError",
    "SessionBusyError",
    "EmptyExtraction",
    "ExtractionGateway",
    "ExtractionOutcome",
    "FailedExtraction",
    "KnowledgeGraphExtractor",
    "PopulatedExtraction",
    "extract_outcome",
    "load_extraction_config",
    "DocumentPart",
    "MultimodalProvider",
    "OpenAIResponsesProvider",
    "create_extractor",
    "ExtractionSession",
    "SessionState",
    "SessionStatus",
    "ExtractorSettings",
]
