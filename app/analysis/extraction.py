"""Flattens a successful analysis payload into plain text.

Section order: document content, key/value pairs, entities. Missing sections
are skipped; malformed items inside a present section are skipped one by one.
"""

from typing import Any

CONTENT_HEADER = "=== Document Content ==="
KEY_VALUE_HEADER = "=== Key-Value Pairs ==="
ENTITIES_HEADER = "=== Entities ==="


def extract_text(analyze_result: dict[str, Any]) -> str:
    lines: list[str] = []

    content = analyze_result.get("content")
    if isinstance(content, str):
        lines.extend([CONTENT_HEADER, content, ""])

    pairs = analyze_result.get("keyValuePairs")
    if isinstance(pairs, list):
        lines.append(KEY_VALUE_HEADER)
        lines.extend(_key_value_line(pair) for pair in pairs if _key_content(pair) is not None)
        lines.append("")

    entities = analyze_result.get("entities")
    if isinstance(entities, list):
        lines.append(ENTITIES_HEADER)
        for entity in entities:
            line = _entity_line(entity)
            if line is not None:
                lines.append(line)

    return "\n".join(lines)


def _content_of(element: Any) -> str | None:
    if not isinstance(element, dict):
        return None
    value = element.get("content")
    return value if isinstance(value, str) else None


def _key_content(pair: Any) -> str | None:
    if not isinstance(pair, dict):
        return None
    return _content_of(pair.get("key"))


def _key_value_line(pair: dict[str, Any]) -> str:
    value = _content_of(pair.get("value")) or ""
    return f"{_key_content(pair)}: {value}"


def _entity_line(entity: Any) -> str | None:
    if not isinstance(entity, dict):
        return None
    category = entity.get("category")
    content = entity.get("content")
    if not isinstance(category, str) or not isinstance(content, str):
        return None
    return f"{category}: {content}"
