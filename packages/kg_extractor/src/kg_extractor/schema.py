"""JSON Schema ответа модели и базовая инструкция извлечения."""

from __future__ import annotations

from typing import Any

SCHEMA_NAME = "knowledge_graph"

KNOWLEDGE_GRAPH_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "nodes": {
            "type": "array",
            "description": "List of all entities (nodes) in the knowledge graph.",
            "items": {
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "minLength": 1,
                        "description": (
                            "A unique identifier for the node (e.g., 'resistor_r1'). "
                            "Should be concise and descriptive, in snake_case."
                        ),
                    },
                    "label": {
                        "type": "string",
                        "minLength": 1,
                        "description": (
                            "The primary category or type of the entity "
                            "(e.g., 'Component', 'Specification', 'Material'). Should be in PascalCase."
                        ),
                    },
                    "properties": {
                        "type": "object",
                        "description": (
                            "A key-value map of attributes for the node. All relevant data from the "
                            "document should be captured here. For example, "
                            "{'name': 'R1', 'value': '10kΩ', 'tolerance': '5%'}."
                        ),
                    },
                },
                "required": ["id", "label", "properties"],
            },
        },
        "relationships": {
            "type": "array",
            "description": "List of all connections (relationships) between the entities.",
            "items": {
                "type": "object",
                "properties": {
                    "source": {"type": "string", "description": "The 'id' of the source node for the relationship."},
                    "target": {"type": "string", "description": "The 'id' of the target node for the relationship."},
                    "type": {
                        "type": "string",
                        "minLength": 1,
                        "description": (
                            "The type of the relationship, in uppercase snake_case "
                            "(e.g., 'HAS_SPECIFICATION', 'MANUFACTURED_BY', 'PART_OF')."
                        ),
                    },
                    "properties": {
                        "type": "object",
                        "description": "A key-value map of attributes for the relationship, if any.",
                    },
                },
                "required": ["source", "target", "type"],
            },
        },
    },
    "required": ["nodes", "relationships"],
}

EXTRACTION_INSTRUCTIONS = """
You are an expert system designed to extract structured information from technical documents about product parts.
Your task is to analyze the provided document pages (as images or text) and construct a detailed knowledge graph.
Identify all key entities (components, specifications, materials, manufacturers, part numbers, etc.) and the relationships between them.

Output a JSON object that strictly adheres to the provided schema.
- Every node must have a unique 'id', a 'label', and a 'properties' object. The 'id' should be a descriptive, concise, snake_case string. The 'label' should be in PascalCase.
- Capture all relevant details in the 'properties' objects for both nodes and relationships.
- Relationships must connect nodes using their 'id' values. The relationship 'type' must be in UPPERCASE_SNAKE_CASE.
- Ensure the graph is comprehensive and accurately reflects the information in the document.
- If no meaningful entities or relationships can be extracted, return an object with empty arrays for 'nodes' and 'relationships'.
""".strip()
