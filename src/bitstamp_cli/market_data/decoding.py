# src/bitstamp_cli/market_data/decoding.py

"""
Helpers that turn parsed JSON into typed records.

Decoders are plain callables taking the parsed payload and returning a record,
raising :class:`SchemaError` when the payload has the wrong shape. Alternative
shapes are expressed as an ordered list of decoders tried by
:func:`first_success`.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple, TypeVar

T = TypeVar("T")
Decoder = Callable[[Any], T]


class SchemaError(ValueError):
    """Raised when a payload does not match the expected record shape."""
    pass


def parse_json(body: str) -> Any:
    """Parses a response body; malformed JSON is reported as SchemaError."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise SchemaError(f"malformed JSON: {e}") from e


def require_mapping(payload: Any, what: str = "object") -> Mapping[str, Any]:
    if not isinstance(payload, dict):
        raise SchemaError(f"expected {what}, got {_json_type(payload)}")
    return payload


def require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise SchemaError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        # Numbers are rejected rather than reformatted so decimals keep their text.
        raise SchemaError(f"field '{key}' must be a string, got {_json_type(value)}")
    return value


def optional_str(data: Mapping[str, Any], key: str) -> str | None:
    if data.get(key) is None:
        return None
    return require_str(data, key)


def require_int(data: Mapping[str, Any], key: str) -> int:
    if key not in data:
        raise SchemaError(f"missing field '{key}'")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"field '{key}' must be an integer, got {_json_type(value)}")
    return value


def decode_list(payload: Any, item_decoder: Decoder[T], what: str = "array") -> List[T]:
    """Decodes every element of a JSON array, in array order."""
    if not isinstance(payload, list):
        raise SchemaError(f"expected {what}, got {_json_type(payload)}")
    items = []
    for index, item in enumerate(payload):
        try:
            items.append(item_decoder(item))
        except SchemaError as e:
            raise SchemaError(f"{what}[{index}]: {e}") from e
    return items


def first_element(item_decoder: Decoder[T]) -> Decoder[T]:
    """Builds a decoder for a non-empty array that yields its first decoded element."""
    def decode(payload: Any) -> T:
        items = decode_list(payload, item_decoder)
        if not items:
            raise SchemaError("expected a non-empty array, got an empty one")
        return items[0]
    return decode


def first_success(payload: Any, attempts: Sequence[Tuple[str, Decoder[T]]]) -> T:
    """
    Tries each named decoder in order and returns the first successful result.

    When every attempt fails, the SchemaError lists each attempt's diagnostic.
    """
    failures: Dict[str, str] = {}
    for name, decoder in attempts:
        try:
            return decoder(payload)
        except SchemaError as e:
            failures[name] = str(e)
    detail = "; ".join(f"as {name}: {reason}" for name, reason in failures.items())
    raise SchemaError(f"no matching shape ({detail})")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
