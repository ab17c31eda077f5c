"""
Модель графа знаний и компилятор его в Cypher.

Пакет не обращается ни к LLM, ни к базе данных: на вход получает готовый
GraphData, на выходе отдаёт текст скрипта с идемпотентными MERGE.
"""

from .compiler import CypherCompiler, CypherScript, UnresolvedRelationship, generate_cypher_query
from .constraints import unique_id_constraints
from .models import GraphData, Node, Relationship
from .properties import format_properties, format_value, quote_identifier

__all__ = [
    "CypherCompiler",
    "CypherScript",
    "UnresolvedRelationship",
    "generate_cypher_query",
    "unique_id_constraints",
    "GraphData",
    "Node",
    "Relationship",
    "format_properties",
    "format_value",
    "quote_identifier",
]
