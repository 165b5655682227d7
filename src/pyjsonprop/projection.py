"""Selective field projection of JSON documents by dot paths.

Paths may address array elements by index (``"installments.0.period"``).
:func:`select_paths` builds the projected document in memory;
:func:`mongo_projection` builds the projection a MongoDB ``find`` accepts,
which cannot address array elements by position.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pyjsonprop._accessor import resolve_segments
from pyjsonprop._path import Segment, format_path, is_index, try_parse_path
from pyjsonprop._values import MISSING, deep_clone


@dataclass(frozen=True)
class ArrayPath:
    """A path that selects one element (or a field of it) from an array."""

    array: str
    index: int
    field: str = ""


def split_paths(paths: Iterable[str]) -> tuple[list[ArrayPath], list[str]]:
    """Separate element-addressing paths from plain field paths.

    The array field of every :class:`ArrayPath` is also listed among the
    regular paths, so that a query fetches the whole array. Malformed paths
    are skipped.

    Returns:
        ``(array_paths, regular_paths)``; regular paths are de-duplicated in
        first-seen order.
    """
    array_paths: list[ArrayPath] = []
    regular: dict[str, None] = {}

    for path in paths:
        segments = try_parse_path(path)
        if segments is None:
            continue
        pos = next((i for i, seg in enumerate(segments) if i > 0 and is_index(seg)), None)
        if pos is None:
            regular[path] = None
            continue
        array = format_path(segments[:pos])
        array_paths.append(
            ArrayPath(array=array, index=int(segments[pos]), field=format_path(segments[pos + 1 :]))
        )
        regular[array] = None

    return array_paths, list(regular)


def mongo_projection(paths: Iterable[str]) -> dict[str, int]:
    """Build an inclusion projection (``{"a.b": 1}``) for the given paths.

    Element-addressing paths are widened to their array field, and paths
    already covered by an included ancestor are dropped (MongoDB rejects
    such path collisions).
    """
    _, regular = split_paths(paths)
    return {format_path(segments): 1 for segments in _drop_covered(regular)}


def select_paths(document: Any, paths: Iterable[str]) -> dict[str, Any]:
    """Return a new document holding only the values at ``paths``.

    The result keeps the shape of ``document``. For arrays, the selected
    elements appear in the order they were first selected, and several
    fields selected from the same element are merged into one element.
    Paths that do not resolve or are malformed are skipped.

    Example:
        >>> doc = {"a": {"b": 1, "c": 2}, "items": [{"n": 1}, {"n": 2, "m": 3}]}
        >>> select_paths(doc, ["a.b", "items.1.n"])
        {'a': {'b': 1}, 'items': [{'n': 2}]}
    """
    result: dict[str, Any] = {}
    if not isinstance(document, dict):
        return result

    positions: dict[int, dict[int, int]] = {}
    for segments in _drop_covered(paths):
        value = resolve_segments(document, segments)
        if value is MISSING:
            continue
        _graft(result, document, segments, value, positions)
    return result


def _drop_covered(paths: Iterable[str]) -> list[tuple[Segment, ...]]:
    parsed: list[tuple[Segment, ...]] = []
    for path in paths:
        segments = try_parse_path(path)
        if segments is not None and segments not in parsed:
            parsed.append(segments)
    return [
        segments
        for segments in parsed
        if not any(len(other) < len(segments) and segments[: len(other)] == other for other in parsed)
    ]


def _graft(
    target: Any,
    source: Any,
    segments: tuple[Segment, ...],
    value: Any,
    positions: dict[int, dict[int, int]],
) -> None:
    last = len(segments) - 1
    for i, seg in enumerate(segments):
        if isinstance(source, list):
            slots = positions.setdefault(id(target), {})
            pos = slots.get(seg)
            if i == last:
                if pos is None:
                    slots[seg] = len(target)
                    target.append(deep_clone(value))
                else:
                    target[pos] = deep_clone(value)
                return
            child_source = source[seg]
            if pos is None:
                pos = slots[seg] = len(target)
                target.append(_empty_like(child_source))
            child_target = target[pos]
        else:
            key = str(seg)
            if i == last:
                target[key] = deep_clone(value)
                return
            child_source = source[key]
            child_target = target.get(key)
            if child_target is None:
                child_target = target[key] = _empty_like(child_source)
        target, source = child_target, child_source


def _empty_like(value: Any) -> Any:
    return [] if isinstance(value, list) else {}
