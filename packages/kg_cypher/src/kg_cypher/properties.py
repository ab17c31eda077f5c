"""Форматирование наборов свойств в литералы Cypher map."""

from __future__ import annotations

import re
from typing import Any, Mapping

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_LINE_BREAKS = re.compile(r"[\r\n\x0b\x0c\x85\u2028\u2029]")
_STRING_ESCAPES = {"\n": "\\n", "\r": "\\r"}


def quote_identifier(name: str) -> str:
    """Возвращает имя как есть либо в обратных кавычках, если это не простой идентификатор."""

    if not name:
        raise ValueError("identifier must not be empty")
    if _IDENTIFIER.fullmatch(name):
        return name
    return "`" + name.replace("`", "``") + "`"


def quote_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = re.sub(r"[\r\n]", lambda m: _STRING_ESCAPES[m.group()], escaped)
    return f'"{escaped}"'


def single_line(text: str) -> str:
    """Экранирует переводы строк, чтобы текст не вышел за пределы однострочного комментария."""

    return _LINE_BREAKS.sub(lambda m: m.group().encode("unicode_escape").decode("ascii"), text)


def format_value(value: Any) -> str:
    """Приводит значение свойства к литералу Cypher.

    Строки берутся в двойные кавычки, bool и None пишутся как ``true``/``false``/``null``,
    вложенные словари и последовательности становятся map- и list-литералами.
    Прочие значения выводятся своим текстовым представлением.
    """

    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return "{" + _format_entries(value) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    return str(value)


def format_properties(properties: Mapping[str, Any]) -> str:
    """Форматирует свойства как ``{key: value, ...}``.

    Порядок ключей совпадает с порядком вставки. Для пустого набора
    возвращается пустая строка, и вызывающий код опускает фигурные скобки.
    """

    if not properties:
        return ""
    return "{" + _format_entries(properties) + "}"


def _format_entries(properties: Mapping[str, Any]) -> str:
    return ", ".join(f"{quote_identifier(str(key))}: {format_value(value)}" for key, value in properties.items())
