from __future__ import annotations

import re

import pytest

from kg_cypher import format_properties, format_value, quote_identifier


def test_empty_mapping_returns_empty_string() -> None:
    assert format_properties({}) == ""


def test_strings_are_quoted_and_scalars_are_literal() -> None:
    result = format_properties({"name": "R1", "count": 3, "ratio": 0.5, "active": True, "note": None})

    assert result == '{name: "R1", count: 3, ratio: 0.5, active: true, note: null}'


def test_key_order_follows_insertion_order() -> None:
    first = format_properties({"b": 1, "a": 2})
    second = format_properties({"a": 2, "b": 1})

    assert first == "{b: 1, a: 2}"
    assert second == "{a: 2, b: 1}"
    assert format_properties({"b": 1, "a": 2}) == first


@pytest.mark.parametrize(
    "value",
    ['10" wide', 'say "hi"', '"', 'trailing\\', 'mixed \\" quote'],
)
def test_quotes_inside_strings_cannot_terminate_literal(value: str) -> None:
    literal = format_value(value)

    assert literal.startswith('"') and literal.endswith('"')
    body = literal[1:-1]
    # каждая кавычка внутри литерала экранирована нечётным числом обратных слэшей
    for match in re.finditer(r'(\\*)"', body):
        assert len(match.group(1)) % 2 == 1


def test_quote_is_escaped_with_backslash() -> None:
    assert format_properties({"size": '10" wide'}) == '{size: "10\\" wide"}'


def test_nested_values_render_as_cypher_literals() -> None:
    result = format_properties({"dims": {"w": 10, "unit": "mm"}, "tags": ["a", 2], "meta": {}})

    assert result == '{dims: {w: 10, unit: "mm"}, tags: ["a", 2], meta: {}}'


def test_non_identifier_keys_are_backquoted() -> None:
    assert format_properties({"part number": "X-1"}) == '{`part number`: "X-1"}'
    assert quote_identifier("HAS_PART") == "HAS_PART"
    assert quote_identifier("odd`name") == "`odd``name`"


def test_identifier_with_trailing_newline_is_backquoted() -> None:
    assert quote_identifier("Foo\n") == "`Foo\n`"
    assert quote_identifier("Foo") == "Foo"


def test_empty_identifier_is_rejected() -> None:
    with pytest.raises(ValueError):
        quote_identifier("")


def test_line_breaks_in_strings_are_escaped() -> None:
    assert format_value("a\nb\r\nc") == '"a\\nb\\r\\nc"'
