"""JSON value model: structural copy, equality, normalization and coercion.

Documents are plain Python JSON values: ``dict`` (insertion-ordered objects),
``list``, ``str``, ``int``, ``float``, ``bool`` and ``None``.
"""

from __future__ import annotations

import dataclasses
import datetime
import uuid
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, get_origin

from pyjsonprop._constants import DEFAULT_MAX_DEPTH
from pyjsonprop._errors import (
    ERR_MSG_DEPTH_EXCEEDED,
    ERR_MSG_UNSUPPORTED_VALUE,
    InvalidArgumentError,
    MaxDepthExceededError,
)

JsonScalar = str | int | float | bool | None
JsonValue = dict[str, "JsonValue"] | list["JsonValue"] | JsonScalar


class _Missing:
    """Sentinel for "no value at this path", distinct from JSON ``null``."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def check_depth(depth: int, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    if depth > max_depth:
        raise MaxDepthExceededError(
            ERR_MSG_DEPTH_EXCEEDED,
            f"depth {depth} exceeds limit {max_depth}",
        )


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def deep_clone(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Return a structural copy of a JSON value.

    Objects and arrays are copied at every level; scalars are immutable and
    returned as-is.

    Raises:
        MaxDepthExceededError: If the value is nested deeper than ``max_depth``.
    """
    return _clone(value, 0, max_depth)


def _clone(value: Any, depth: int, max_depth: int) -> Any:
    if isinstance(value, dict):
        check_depth(depth, max_depth)
        return {k: _clone(v, depth + 1, max_depth) for k, v in value.items()}
    if isinstance(value, list):
        check_depth(depth, max_depth)
        return [_clone(v, depth + 1, max_depth) for v in value]
    return value


def json_equal(a: Any, b: Any) -> bool:
    """Deep JSON equality.

    Numbers compare numerically (``1 == 1.0``), booleans never equal numbers,
    and object key order is ignored.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    return a is None and b is None


def union(left: list[Any], right: list[Any]) -> list[Any]:
    """Set union of two arrays under :func:`json_equal`, preserving order."""
    result: list[Any] = []
    for item in (*left, *right):
        if not any(json_equal(item, seen) for seen in result):
            result.append(deep_clone(item))
    return result


def to_json_value(value: Any, _depth: int = 0) -> JsonValue:
    """Normalize a Python value into the JSON value model.

    Mappings and sequences are rebuilt, so the result never aliases the
    caller's containers.

    Raises:
        InvalidArgumentError: If the value has no JSON representation.
    """
    check_depth(_depth)
    # Enum first: StrEnum/IntEnum members are also str/int.
    if isinstance(value, Enum):
        return to_json_value(value.value, _depth + 1)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return {str(k): to_json_value(v, _depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(v, _depth + 1) for v in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json_value(dataclasses.asdict(value), _depth + 1)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    raise InvalidArgumentError(
        ERR_MSG_UNSUPPORTED_VALUE,
        f"cannot convert value of type {type(value).__name__} to JSON",
    )


def coerce(value: Any, as_type: Any) -> Any:
    """Convert a JSON value to ``as_type``.

    Total: returns :data:`MISSING` instead of raising when the value cannot
    be represented as the requested type. ``None`` (or ``object``/``Any``)
    as ``as_type`` accepts any value. Parameterized generics such as
    ``list[int]`` are checked against their origin only.
    """
    if as_type is None or as_type is object or as_type is Any:
        return value
    if value is None:
        return MISSING
    if as_type is bool:
        return _to_bool(value)
    if as_type is int:
        return _to_int(value)
    if as_type is float:
        return _to_float(value)
    if as_type is str:
        return _to_str(value)
    return value if _is_instance(value, as_type) else MISSING


def _is_instance(value: Any, as_type: Any) -> bool:
    try:
        return isinstance(value, as_type)
    except TypeError:
        # list[int], typing.List[int], Literal[...]
        origin = get_origin(as_type)
        return isinstance(origin, type) and isinstance(value, origin)


def _to_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return MISSING


def _to_int(value: Any) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else MISSING
    if isinstance(value, str):
        if "_" in value:
            return MISSING
        try:
            return int(value.strip())
        except ValueError:
            return MISSING
    return MISSING


def _to_float(value: Any) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if "_" in value:
            return MISSING
        try:
            return float(value.strip())
        except ValueError:
            return MISSING
    return MISSING


def _to_str(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return MISSING
