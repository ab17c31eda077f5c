"""Модель графа знаний: узлы, связи и граф целиком."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _non_empty_keys(properties: Any) -> Any:
    """Проверяет, что во всех (в том числе вложенных) словарях нет пустых ключей."""

    if isinstance(properties, dict):
        if any(not key for key in properties):
            raise ValueError("property names must not be empty")
        for value in properties.values():
            _non_empty_keys(value)
    elif isinstance(properties, list):
        for item in properties:
            _non_empty_keys(item)
    return properties


class Node(BaseModel):
    """Сущность графа: идентификатор, метка и свойства."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("properties")
    @classmethod
    def validate_property_names(cls, value: dict[str, Any]) -> dict[str, Any]:
        return _non_empty_keys(value)


class Relationship(BaseModel):
    """Направленная типизированная связь между двумя id узлов."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    type: str = Field(..., min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("properties")
    @classmethod
    def validate_property_names(cls, value: dict[str, Any]) -> dict[str, Any]:
        return _non_empty_keys(value)


class GraphData(BaseModel):
    """Граф, полученный за один запрос извлечения. После создания не меняется."""

    model_config = ConfigDict(frozen=True)

    nodes: list[Node]
    relationships: list[Relationship]

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.relationships

    def node_index(self) -> dict[str, Node]:
        """Индекс id -> узел. При дублях id выигрывает первый узел."""

        index: dict[str, Node] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index

    def unresolved_relationships(self) -> list[Relationship]:
        index = self.node_index()
        return [rel for rel in self.relationships if rel.source not in index or rel.target not in index]

    def labels(self) -> list[str]:
        seen: dict[str, None] = {}
        for node in self.nodes:
            seen.setdefault(node.label, None)
        return list(seen)
