"""CLI для извлечения графа знаний из документов и компиляции его в Cypher."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from kg_cypher import GraphData, generate_cypher_query

from .exceptions import ExtractionError
from .parts import DocumentPart
from .runtime import create_extractor
from .session import EMPTY_RESULT_MESSAGE, ExtractionSession, SessionStatus
from .settings import ExtractorSettings

logger = logging.getLogger(__name__)

app = typer.Typer(help="Knowledge graph extraction and Cypher generation tools.")


@app.callback()
def main_callback() -> None:
    """Корневой callback, требующий указания команды."""


def _build_settings(
    *,
    profiles_path: Path | None,
    profile: str | None,
    openai_model: str | None,
    openai_api_key: str | None,
    openai_timeout: float | None,
    max_retries: int | None,
) -> ExtractorSettings:
    overrides = {
        "profiles_path": profiles_path,
        "profile": profile,
        "openai_model": openai_model,
        "openai_api_key": openai_api_key,
        "openai_timeout": openai_timeout,
        "max_retries": max_retries,
    }
    kwargs: dict[str, Any] = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ExtractorSettings(**kwargs)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc


@app.command(name="extract")
def extract(
    files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Document pages (images or text)."),
    graph_out: Optional[Path] = typer.Option(None, "--graph-out", help="Write extracted graph JSON to this file."),
    cypher_out: Optional[Path] = typer.Option(None, "--cypher-out", help="Write Cypher script to this file."),
    profiles_path: Optional[Path] = typer.Option(
        None,
        "--profiles-path",
        help="YAML with extraction profiles (KG_EXTRACTOR_PROFILES_PATH).",
    ),
    profile: Optional[str] = typer.Option(None, "--profile", help="Extraction profile name (KG_EXTRACTOR_PROFILE)."),
    openai_model: Optional[str] = typer.Option(
        None,
        "--openai-model",
        help="OpenAI model for the Responses API (KG_EXTRACTOR_OPENAI_MODEL).",
    ),
    openai_api_key: Optional[str] = typer.Option(
        None,
        "--openai-api-key",
        help="OpenAI key (KG_EXTRACTOR_OPENAI_API_KEY).",
    ),
    openai_timeout: Optional[float] = typer.Option(
        None,
        "--openai-timeout",
        min=1.0,
        help="OpenAI timeout, seconds (KG_EXTRACTOR_OPENAI_TIMEOUT).",
    ),
    max_retries: Optional[int] = typer.Option(
        None,
        "--max-retries",
        min=0,
        help="Retries on invalid model output (KG_EXTRACTOR_MAX_RETRIES).",
    ),
) -> None:
    """Извлекает граф из документов и печатает Cypher-скрипт в stdout."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s - %(message)s")
    settings = _build_settings(
        profiles_path=profiles_path,
        profile=profile,
        openai_model=openai_model,
        openai_api_key=openai_api_key,
        openai_timeout=openai_timeout,
        max_retries=max_retries,
    )

    try:
        extractor = create_extractor(settings)
        parts = [DocumentPart.from_path(path) for path in files]
    except (ExtractionError, OSError, ValueError) as exc:
        logger.error("Extraction setup failed: %s", exc)
        raise typer.Exit(code=1) from exc

    session = ExtractionSession(extractor)
    state = asyncio.run(session.upload(parts))

    if state.status is not SessionStatus.SUCCESS or state.graph is None:
        typer.echo(state.error or "Extraction failed.", err=True)
        raise typer.Exit(code=2 if state.error == EMPTY_RESULT_MESSAGE else 1)

    if graph_out is not None:
        graph_out.write_text(state.graph.model_dump_json(indent=2), encoding="utf-8")
    if cypher_out is not None:
        cypher_out.write_text(state.cypher_query, encoding="utf-8")
    typer.echo(state.cypher_query, nl=False)


@app.command(name="compile")
def compile_graph(
    graph_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Graph JSON with nodes and relationships."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write Cypher script to this file."),
    with_constraints: bool = typer.Option(
        False,
        "--with-constraints",
        help="Prepend unique id constraints for every label.",
    ),
) -> None:
    """Компилирует сохранённый граф в Cypher без обращения к модели."""

    try:
        graph = GraphData.model_validate_json(graph_file.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid graph file {graph_file}: {exc}") from exc

    script = generate_cypher_query(graph, with_constraints=with_constraints)
    if output is not None:
        output.write_text(script, encoding="utf-8")
        typer.echo(f"Wrote {len(graph.nodes)} nodes and {len(graph.relationships)} relationships to {output}")
        return
    typer.echo(script, nl=False)


def main() -> None:
    """Точка входа для python -m kg_extractor.cli."""

    app()


if __name__ == "__main__":  # pragma: no cover - ручной запуск
    main()
