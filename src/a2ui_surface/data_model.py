from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .error_codes import ERROR_MALFORMED_DATA_ENTRY

logger = logging.getLogger(__name__)

TYPED_VALUE_KEYS = (
    "valueMap",
    "valueList",
    "valueString",
    "valueNumber",
    "valueBoolean",
    "valueNull",
)


def split_path(path: Any) -> List[str]:
    """Split a slash-delimited data path; "/" and "" address the whole model."""
    text = str(path or "").strip()
    if not text or text == "/":
        return []
    return [part for part in text.split("/") if part]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _encode_typed_value(value: Any) -> Dict[str, Any]:
    if value is None:
        return {"valueNull": True}
    if isinstance(value, bool):
        return {"valueBoolean": value}
    if isinstance(value, (int, float)):
        return {"valueNumber": value}
    if isinstance(value, str):
        return {"valueString": value}
    if isinstance(value, Mapping):
        return {"valueMap": encode_object_to_contents(value)}
    if _is_sequence(value):
        return {"valueList": [_encode_list_item(item) for item in value]}
    return {"valueString": str(value)}


def _encode_list_item(item: Any) -> Any:
    if isinstance(item, Mapping):
        return encode_object_to_contents(item)
    return _encode_typed_value(item)


def encode_object_to_contents(value: Mapping[str, Any]) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    for key, item in dict(value or {}).items():
        entry = {"key": str(key)}
        entry.update(_encode_typed_value(item))
        contents.append(entry)
    return contents


def _has_typed_value(block: Mapping[str, Any]) -> bool:
    return any(key in block for key in TYPED_VALUE_KEYS)


def _decode_list_item(item: Any) -> Any:
    if _is_sequence(item):
        return decode_contents_to_object(item)
    if isinstance(item, Mapping):
        if "key" in item and _has_typed_value(item):
            return decode_contents_to_object([item])
        if _has_typed_value(item):
            return _decode_typed_value(item)
        return deepcopy(dict(item))
    return item


def _decode_typed_value(block: Mapping[str, Any]) -> Any:
    if "valueMap" in block:
        if not _is_sequence(block["valueMap"]):
            raise ValueError("valueMap must be a list of entries")
        return decode_contents_to_object(block["valueMap"])
    if "valueList" in block:
        if not _is_sequence(block["valueList"]):
            raise ValueError("valueList must be a list")
        return [_decode_list_item(item) for item in block["valueList"]]
    if "valueString" in block:
        return str(block["valueString"])
    if "valueNumber" in block:
        value = block["valueNumber"]
        if isinstance(value, bool):
            raise ValueError("valueNumber must be numeric")
        number = float(value)
        return int(number) if number.is_integer() else number
    if "valueBoolean" in block:
        value = block["valueBoolean"]
        if not isinstance(value, bool):
            raise ValueError("valueBoolean must be a boolean")
        return value
    if block.get("valueNull") is True:
        return None
    raise ValueError("entry carries no value* field")


def decode_contents_to_object(contents: Iterable[Any]) -> Dict[str, Any]:
    """Decode typed data entries into a plain dict, skipping malformed entries."""
    out: Dict[str, Any] = {}
    for item in contents or []:
        if not isinstance(item, Mapping):
            logger.debug("[%s] skipping non-mapping data entry: %r", ERROR_MALFORMED_DATA_ENTRY, item)
            continue
        key = item.get("key")
        if not isinstance(key, str) or not key:
            logger.debug("[%s] skipping data entry without key: %r", ERROR_MALFORMED_DATA_ENTRY, item)
            continue
        try:
            out[key] = _decode_typed_value(item)
        except (TypeError, ValueError) as exc:
            logger.debug("[%s] skipping data entry '%s': %s", ERROR_MALFORMED_DATA_ENTRY, key, exc)
    return out


def apply_data_model_update(
    model: Any,
    *,
    path: Any,
    payload: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Return a new model with ``payload`` applied at ``path``.

    At the root each top-level key of the payload replaces the existing value
    under that key; nested mappings are not merged. A non-root ``path``
    replaces the value at that path with the payload, creating mappings for
    the intermediate segments.
    """
    next_model: Dict[str, Any] = deepcopy(dict(model)) if isinstance(model, Mapping) else {}
    segments = split_path(path)
    if segments:
        cursor: Dict[str, Any] = next_model
        for segment in segments[:-1]:
            current = cursor.get(segment)
            if not isinstance(current, dict):
                current = {}
                cursor[segment] = current
            cursor = current
        cursor[segments[-1]] = {str(key): deepcopy(value) for key, value in payload.items()}
        return next_model

    for key, value in payload.items():
        next_model[str(key)] = deepcopy(value)
    return next_model
