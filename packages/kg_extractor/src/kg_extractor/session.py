"""Сессия извлечения: состояние idle/loading/success/error вокруг шлюза и компилятора."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict

from kg_cypher import CypherCompiler, GraphData

from .exceptions import SessionBusyError
from .gateway import EmptyExtraction, ExtractionGateway, FailedExtraction, extract_outcome
from .parts import DocumentPart

logger = logging.getLogger(__name__)

EMPTY_RESULT_MESSAGE = (
    "The model couldn't extract any entities or relationships. "
    "Please try a different document or check the document quality."
)


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SessionStatus = SessionStatus.IDLE
    graph: GraphData | None = None
    cypher_query: str = ""
    error: str | None = None


class ExtractionSession:
    """Один пользовательский сеанс: не более одного извлечения одновременно.

    Ошибки шлюза не выходят наружу, а превращаются в состояние ``error``
    с человекочитаемым сообщением. Вернуться в ``idle`` можно через ``reset``.
    """

    def __init__(self, gateway: ExtractionGateway, *, compiler: CypherCompiler | None = None) -> None:
        self._gateway = gateway
        self._compiler = compiler or CypherCompiler()
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    async def upload(self, parts: Sequence[DocumentPart]) -> SessionState:
        if not parts:
            return self._state
        if self._state.status is SessionStatus.LOADING:
            raise SessionBusyError("Extraction is already in progress")

        self._state = SessionState(status=SessionStatus.LOADING)
        outcome = await asyncio.to_thread(extract_outcome, self._gateway, list(parts))

        if isinstance(outcome, FailedExtraction):
            logger.error("Error extracting knowledge graph: %s", outcome.reason)
            self._state = SessionState(status=SessionStatus.ERROR, error=f"Failed to generate graph. {outcome.reason}")
        elif isinstance(outcome, EmptyExtraction):
            logger.info("Extraction returned an empty graph")
            self._state = SessionState(status=SessionStatus.ERROR, error=EMPTY_RESULT_MESSAGE)
        else:
            script = self._compiler.compile(outcome.graph).render()
            self._state = SessionState(status=SessionStatus.SUCCESS, graph=outcome.graph, cypher_query=script)
        return self._state

    def reset(self) -> SessionState:
        self._state = SessionState()
        return self._state
