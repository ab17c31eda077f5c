"""Компилятор GraphData в скрипт идемпотентных Cypher-upsert'ов."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .constraints import unique_id_constraints
from .models import GraphData, Node, Relationship
from .properties import format_properties, quote_identifier, single_line

logger = logging.getLogger(__name__)

HEADER = "// Generated Cypher Query"
NODES_SECTION = "// 1. Create Nodes"
RELATIONSHIPS_SECTION = "// 2. Create Relationships"
CONSTRAINTS_SECTION = "// 0. Unique Id Constraints"
WARNING_MARKER = "// WARNING:"


@dataclass(frozen=True)
class UnresolvedRelationship:
    relationship: Relationship
    missing: tuple[str, ...]

    def comment(self) -> str:
        rel = self.relationship
        missing = ", ".join(single_line(ref) for ref in self.missing)
        return (
            f"{WARNING_MARKER} Could not create relationship for missing node(s) "
            f"{missing}: {single_line(rel.source)} -[{single_line(rel.type)}]-> {single_line(rel.target)}"
        )


@dataclass
class CypherScript:
    """Результат компиляции: отдельные операторы и предупреждения."""

    node_statements: list[str] = field(default_factory=list)
    relationship_entries: list[str] = field(default_factory=list)
    warnings: list[UnresolvedRelationship] = field(default_factory=list)
    constraint_statements: list[str] = field(default_factory=list)

    @property
    def relationship_statement_count(self) -> int:
        return len(self.relationship_entries) - len(self.warnings)

    def render(self) -> str:
        lines = [HEADER]
        if self.constraint_statements:
            lines.append(CONSTRAINTS_SECTION)
            lines.extend(self.constraint_statements)
            lines.append("")
        lines.append(NODES_SECTION)
        lines.extend(self.node_statements)
        lines.append("")
        lines.append(RELATIONSHIPS_SECTION)
        lines.extend(self.relationship_entries)
        return "\n".join(lines) + "\n"


class CypherCompiler:
    """Строит MERGE-операторы для узлов и связей графа.

    Узлы сливаются по метке и набору свойств с подмешанным ``id``.
    Связи сливаются по типу и концам; свойства связи задаются только при создании.
    Связь с неизвестным концом не прерывает компиляцию, а превращается
    в однострочный комментарий-предупреждение.
    """

    def __init__(self, *, with_constraints: bool = False) -> None:
        self._with_constraints = with_constraints

    def compile(self, graph: GraphData) -> CypherScript:
        script = CypherScript()
        if self._with_constraints:
            script.constraint_statements.extend(unique_id_constraints(graph.labels()))

        script.node_statements.extend(self._node_statement(node) for node in graph.nodes)

        index = graph.node_index()
        for rel in graph.relationships:
            source = index.get(rel.source)
            target = index.get(rel.target)
            if source is None or target is None:
                missing = tuple(
                    dict.fromkeys(
                        ref for ref, resolved in ((rel.source, source), (rel.target, target)) if resolved is None
                    )
                )
                unresolved = UnresolvedRelationship(relationship=rel, missing=missing)
                logger.warning(
                    "Skipping relationship %s -[%s]-> %s: missing node(s) %s",
                    rel.source,
                    rel.type,
                    rel.target,
                    ", ".join(missing),
                )
                script.warnings.append(unresolved)
                script.relationship_entries.append(unresolved.comment())
                continue
            script.relationship_entries.append(self._relationship_statement(rel, source, target))

        logger.debug(
            "Compiled %d node statements, %d relationship statements, %d warnings",
            len(script.node_statements),
            script.relationship_statement_count,
            len(script.warnings),
        )
        return script

    @staticmethod
    def _node_statement(node: Node) -> str:
        properties = format_properties({**node.properties, "id": node.id})
        return f"MERGE (n:{quote_identifier(node.label)} {properties});"

    @staticmethod
    def _relationship_statement(rel: Relationship, source: Node, target: Node) -> str:
        source_props = format_properties({"id": source.id})
        target_props = format_properties({"id": target.id})
        rel_props = format_properties(rel.properties)
        statement = (
            f"MATCH (a:{quote_identifier(source.label)} {source_props}), "
            f"(b:{quote_identifier(target.label)} {target_props})\n"
            f"MERGE (a)-[r:{quote_identifier(rel.type)}]->(b)"
        )
        if rel_props:
            statement += f"\nON CREATE SET r += {rel_props}"
        return statement + ";"


def generate_cypher_query(graph: GraphData, *, with_constraints: bool = False) -> str:
    """Возвращает текст Cypher-скрипта, воссоздающего граф."""

    return CypherCompiler(with_constraints=with_constraints).compile(graph).render()
