"""Constraint-выражения (Cypher) для уникальности id узлов."""

from __future__ import annotations

from typing import Iterable, Iterator

from .properties import quote_identifier


def unique_id_constraints(labels: Iterable[str]) -> Iterator[str]:
    for label in labels:
        yield f"CREATE CONSTRAINT IF NOT EXISTS FOR (n:{quote_identifier(label)}) REQUIRE n.id IS UNIQUE;"
