"""Исключения пакета kg_extractor."""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Ошибка извлечения графа: сбой провайдера или непригодный ответ модели."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class NoDocumentPartsError(ExtractionError):
    """Среди переданных частей нет ни изображений, ни текста."""


class SessionBusyError(RuntimeError):
    """Сессия уже выполняет извлечение."""
