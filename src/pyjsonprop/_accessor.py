"""Dot-notation accessor over JSON documents.

Reads never raise (except :func:`get_required`) and fall back to a default.
Writes deep-clone the input document first and return the new document, so
the caller's tree is never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyjsonprop._constants import DEFAULT_NOT_FOUND_MESSAGE, MAX_ARRAY_INDEX
from pyjsonprop._errors import (
    ERR_MSG_EMPTY_PATH,
    ERR_MSG_INVALID_DOCUMENT,
    ERR_MSG_INVALID_INDEX,
    ERR_MSG_INVALID_PATH,
    InvalidArgumentError,
    InvalidPathError,
    NotFoundError,
)
from pyjsonprop._path import Segment, parse_path, try_parse_path
from pyjsonprop._predicate import Predicate, as_predicate
from pyjsonprop._values import (
    MISSING,
    check_depth,
    coerce,
    deep_clone,
    is_container,
    to_json_value,
    union,
)


def resolve_segments(tree: Any, segments: tuple[Segment, ...]) -> Any:
    """Walk ``segments`` from ``tree``; return :data:`MISSING` if absent.

    The returned node is the live node inside ``tree``, not a copy.
    """
    current = tree
    for seg in segments:
        if isinstance(current, dict):
            key = str(seg)
            if key not in current:
                return MISSING
            current = current[key]
        elif isinstance(current, list) and isinstance(seg, int):
            if seg >= len(current):
                return MISSING
            current = current[seg]
        else:
            return MISSING
    return current


def get(
    tree: Any,
    path: str | None,
    default: Any = None,
    *,
    as_type: Any = None,
) -> Any:
    """Read the value at ``path``, falling back to ``default``.

    Args:
        tree: The JSON document. ``None`` is treated as an empty object.
        path: Dot-notation path, e.g. ``"items.1.name"``.
        default: Returned when the path is empty or malformed, does not
            resolve, holds JSON ``null``, or cannot be converted.
        as_type: Requested result type (``str``, ``int``, ``float``,
            ``bool``, ``dict``, ``list``; generics such as ``list[int]``
            match on their origin). Defaults to ``type(default)`` when
            ``default`` is not ``None``.

    Returns:
        The (converted) value. Containers are returned without copying.
    """
    segments = try_parse_path(path)
    if tree is None or segments is None:
        return default

    value = resolve_segments(tree, segments)
    if value is MISSING or value is None:
        return default

    target = as_type
    if target is None and default is not None:
        target = type(default)
    converted = coerce(value, target)
    return default if converted is MISSING else converted


def get_required(
    tree: Any,
    path: str | None,
    not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE,
    *,
    as_type: Any = None,
) -> Any:
    """Read the value at ``path``, raising if nothing is there.

    A JSON ``null`` present at the path is returned as ``None``, as is a
    value that cannot be converted to ``as_type``.

    Raises:
        NotFoundError: If the path does not resolve. The message is
            ``not_found_message`` with ``{path}`` (or ``{0}``) substituted.
    """
    segments = try_parse_path(path)
    value = MISSING if tree is None or segments is None else resolve_segments(tree, segments)
    if value is MISSING:
        raise NotFoundError(
            _format_message(not_found_message, path),
            f"path {path!r} does not resolve",
        )
    if value is None:
        return None

    converted = coerce(value, as_type)
    return None if converted is MISSING else converted


def _format_message(message: str, path: str | None) -> str:
    try:
        return message.format(path, path=path)
    except (IndexError, KeyError, ValueError):
        return message


def upsert(tree: Any, path: str, value: Any) -> Any:
    """Return a copy of ``tree`` with ``value`` written at ``path``.

    Missing intermediate segments are created as empty objects; intermediates
    that are scalars (or arrays addressed by a key) are replaced by empty
    objects. An array index at or past the end of an array appends, padding
    the gap with JSON ``null``.

    Raises:
        InvalidPathError: If the path is empty or malformed, addresses an
            array by key, or pads an array past ``MAX_ARRAY_INDEX``.
        InvalidArgumentError: If ``value`` has no JSON representation.
    """
    segments = parse_path(path)
    result = _writable_root(tree)
    _set(result, segments, to_json_value(value), path)
    return result


def upsert_many(tree: Any, updates: Mapping[str, Any] | None) -> Any:
    """Apply several upserts in mapping order; later overlapping writes win.

    Either every update is applied or, on error, none is visible: writes go
    to a private copy of ``tree``.

    Raises:
        InvalidArgumentError: If ``updates`` is ``None`` or not a mapping.
        InvalidPathError: If any path is invalid.
    """
    if updates is None:
        raise InvalidArgumentError(
            "updates cannot be None",
            "upsert_many called with updates=None",
        )
    if not isinstance(updates, Mapping):
        raise InvalidArgumentError(
            "updates must be a mapping",
            f"upsert_many called with {type(updates).__name__}",
        )

    result = _writable_root(tree)
    for path, value in updates.items():
        _set(result, parse_path(path), to_json_value(value), path)
    return result


def _writable_root(tree: Any) -> Any:
    if is_container(tree):
        return deep_clone(tree)
    return {}


def _set(root: Any, segments: tuple[Segment, ...], value: Any, path: str) -> None:
    current = root
    for seg, nxt in zip(segments, segments[1:]):
        child = _child(current, seg)
        if not (isinstance(child, dict) or (isinstance(child, list) and isinstance(nxt, int))):
            child = {}
            _assign(current, seg, child, path)
        current = child
    _assign(current, segments[-1], value, path)


def _child(container: Any, seg: Segment) -> Any:
    if isinstance(container, dict):
        return container.get(str(seg), MISSING)
    if isinstance(container, list) and isinstance(seg, int) and seg < len(container):
        return container[seg]
    return MISSING


def _assign(container: Any, seg: Segment, value: Any, path: str) -> None:
    if isinstance(container, dict):
        container[str(seg)] = value
        return
    if not isinstance(seg, int):
        raise InvalidPathError(
            ERR_MSG_INVALID_PATH,
            f"cannot set key {seg!r} on an array in path {path!r}",
        )
    if seg < len(container):
        container[seg] = value
        return
    if seg > MAX_ARRAY_INDEX:
        raise InvalidPathError(
            ERR_MSG_INVALID_INDEX,
            f"index {seg} exceeds limit {MAX_ARRAY_INDEX} in path {path!r}",
        )
    container.extend([None] * (seg - len(container)))
    container.append(value)


def remove_path(tree: Any, path: str) -> Any:
    """Return a copy of ``tree`` without the entry at ``path``.

    Object members are dropped and array elements are deleted. A path that
    does not resolve leaves the copy unchanged.

    Raises:
        InvalidPathError: If the path is empty or malformed.
    """
    segments = parse_path(path)
    result = _writable_root(tree)
    parent = resolve_segments(result, segments[:-1])
    last = segments[-1]
    if isinstance(parent, dict):
        parent.pop(str(last), None)
    elif isinstance(parent, list) and isinstance(last, int) and last < len(parent):
        del parent[last]
    return result


def remove(tree: Any, predicate: Predicate | str, recursive: bool = True) -> Any:
    """Return a copy of ``tree`` without the members matching ``predicate``.

    Args:
        tree: The JSON document. ``None`` is treated as an empty object.
        predicate: ``(key, value) -> bool``, or a CEL expression over
            ``key`` and ``value`` such as ``'key == "internal"'``.
        recursive: Also prune nested objects, including objects inside
            arrays.

    Raises:
        InvalidPredicateError: If a CEL predicate does not compile.
    """
    pred = as_predicate(predicate)
    if not is_container(tree):
        return {}
    return _prune(tree, pred, recursive, 0)


def _prune(node: Any, pred: Predicate, recursive: bool, depth: int) -> Any:
    check_depth(depth)
    if isinstance(node, dict):
        result: dict[str, Any] = {}
        for key, value in node.items():
            if pred(key, value):
                continue
            if recursive and is_container(value):
                result[key] = _prune(value, pred, recursive, depth + 1)
            else:
                result[key] = deep_clone(value)
        return result
    return [
        _prune(item, pred, recursive, depth + 1)
        if recursive and is_container(item)
        else deep_clone(item)
        for item in node
    ]


def merge(source: Any, other: Any, merge_arrays: bool = False) -> dict[str, Any]:
    """Deep-merge ``other`` into a copy of ``source``.

    Objects present on both sides merge recursively. Arrays present on both
    sides are unioned (duplicates removed by deep equality) when
    ``merge_arrays`` is set; every other conflict is won by ``other``.

    Either side may be ``None`` or empty (``[]``, ``""``), which counts as an
    empty object.

    Raises:
        InvalidArgumentError: If either side is a non-empty value other than
            an object.
    """
    result = deep_clone(_object_or_empty(source, "source"))
    _merge_into(result, _object_or_empty(other, "other"), merge_arrays, 0)
    return result


def _object_or_empty(value: Any, name: str) -> dict[str, Any]:
    if not value:
        return {}
    if not isinstance(value, dict):
        raise InvalidArgumentError(
            ERR_MSG_INVALID_DOCUMENT,
            f"merge expects an object for {name}, got {type(value).__name__}",
        )
    return value


def _merge_into(target: dict[str, Any], other: dict[str, Any], merge_arrays: bool, depth: int) -> None:
    check_depth(depth)
    for key, value in other.items():
        if key not in target:
            target[key] = deep_clone(value)
            continue
        current = target[key]
        if isinstance(current, dict) and isinstance(value, dict):
            _merge_into(current, value, merge_arrays, depth + 1)
        elif merge_arrays and isinstance(current, list) and isinstance(value, list):
            target[key] = union(current, value)
        else:
            target[key] = deep_clone(value)


def clone_path(tree: Any, source_path: str, destination_path: str) -> Any:
    """Return a copy of ``tree`` with the value at ``source_path`` copied to
    ``destination_path``.

    A source path that does not resolve leaves the copy unchanged. A JSON
    ``null`` at the source is copied. Existing values at the destination are
    overwritten.

    Raises:
        InvalidArgumentError: If either path is empty.
        InvalidPathError: If either path is malformed.
    """
    if not source_path:
        raise InvalidArgumentError(ERR_MSG_EMPTY_PATH, "source path cannot be empty")
    if not destination_path:
        raise InvalidArgumentError(ERR_MSG_EMPTY_PATH, "destination path cannot be empty")

    source_segments = parse_path(source_path)
    destination_segments = parse_path(destination_path)

    result = _writable_root(tree)
    value = resolve_segments(result, source_segments)
    if value is MISSING:
        return result
    _set(result, destination_segments, deep_clone(value), destination_path)
    return result
