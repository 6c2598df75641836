from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Sequence

from .data_model import split_path

LITERAL_KEYS = ("literalString", "literalNumber", "literalBoolean")


def resolve_path(data_model: Any, path: Any) -> Any:
    """Walk ``path`` through ``data_model``; None at the first missing step."""
    cursor: Any = data_model
    for segment in split_path(path):
        if cursor is None:
            return None
        if isinstance(cursor, Mapping):
            cursor = cursor.get(segment)
            continue
        if isinstance(cursor, Sequence) and not isinstance(cursor, (str, bytes, bytearray)):
            try:
                index = int(segment)
            except ValueError:
                return None
            if index < 0 or index >= len(cursor):
                return None
            cursor = cursor[index]
            continue
        return None
    return cursor


def _literal(descriptor: Mapping[str, Any]) -> tuple[bool, Any]:
    for key in LITERAL_KEYS:
        value = descriptor.get(key)
        if value is not None:
            return True, value
    return False, None


def resolve_value(descriptor: Any, data_model: Any) -> Any:
    if not isinstance(descriptor, Mapping):
        return None
    found, value = _literal(descriptor)
    if found:
        return value
    path = descriptor.get("path")
    if isinstance(path, str):
        return resolve_path(data_model, path)
    return None


def to_display_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_text(descriptor: Any, data_model: Any) -> str:
    """Literal wins over path; anything unresolved renders as ""."""
    return to_display_text(resolve_value(descriptor, data_model))


def resolve_action_context(entries: Iterable[Any], data_model: Any) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for entry in entries or []:
        if not isinstance(entry, Mapping):
            continue
        key = entry.get("key")
        if not isinstance(key, str) or not key:
            continue
        resolved[key] = resolve_value(entry.get("value"), data_model)
    return resolved
