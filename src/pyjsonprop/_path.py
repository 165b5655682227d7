"""Dot-notation path parsing.

A path such as ``"items.0.name"`` is split into segments on ``.``. A segment
made of ASCII digits only is an :class:`Index` (an ``int`` that remembers its
text, so it can still address an object key such as ``"007"``); every other
segment is an object key (``str``).
"""

from __future__ import annotations

import re
from functools import lru_cache

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

from pyjsonprop._constants import MAX_PATH_LENGTH, MAX_PATH_SEGMENTS, PATH_SEPARATOR
from pyjsonprop._errors import (
    ERR_MSG_EMPTY_PATH,
    ERR_MSG_INVALID_PATH,
    InvalidPathError,
)


class Index(int):
    """An array index segment that keeps its source text.

    Compares and hashes as the ``int`` it parses to; ``str()`` returns the
    original text, so ``"007"`` still addresses the object key ``"007"``.
    """

    raw: str

    def __new__(cls, raw: str) -> Index:
        self = super().__new__(cls, raw)
        self.raw = raw
        return self

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Index({self.raw!r})"


Segment = str | int

_GRAMMAR = r"""
    path: SEGMENT ("." SEGMENT)*

    SEGMENT: /[^.]+/
"""

_INDEX_RE = re.compile(r"[0-9]+")


class _PathTransformer(Transformer):
    def path(self, children: list[Token]) -> tuple[Segment, ...]:
        return tuple(_to_segment(str(tok)) for tok in children)


_parser = Lark(_GRAMMAR, start="path", parser="lalr", transformer=_PathTransformer())


def _to_segment(raw: str) -> Segment:
    if _INDEX_RE.fullmatch(raw):
        return Index(raw)
    return raw


def is_index(segment: Segment) -> bool:
    return isinstance(segment, int)


def parse_path(path: str) -> tuple[Segment, ...]:
    """Parse a dot-notation path into key and index segments.

    Args:
        path: The path to parse, e.g. ``"user.address.city"``.

    Returns:
        Tuple of segments; index segments are :class:`Index` (an ``int``).

    Raises:
        InvalidPathError: If the path is empty, too long, contains null
            bytes or empty segments, or has too many segments.
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError(ERR_MSG_EMPTY_PATH, f"empty path provided: {path!r}")
    if len(path) > MAX_PATH_LENGTH:
        raise InvalidPathError(
            "path too long",
            f"path length {len(path)} exceeds limit {MAX_PATH_LENGTH}",
        )
    if "\x00" in path:
        raise InvalidPathError(
            "path cannot contain null bytes",
            f"null byte found in path: {path!r}",
        )
    return _parse_cached(path)


@lru_cache(maxsize=1024)
def _parse_cached(path: str) -> tuple[Segment, ...]:
    try:
        segments: tuple[Segment, ...] = _parser.parse(path)
    except UnexpectedInput as exc:
        raise InvalidPathError(
            ERR_MSG_INVALID_PATH,
            f"path {path!r} is malformed at column {exc.column}",
            wrapped=exc,
        ) from exc
    if len(segments) > MAX_PATH_SEGMENTS:
        raise InvalidPathError(
            "path has too many segments",
            f"path has {len(segments)} segments, limit is {MAX_PATH_SEGMENTS}",
        )
    return segments


def try_parse_path(path: str | None) -> tuple[Segment, ...] | None:
    """Parse a path for reading; malformed or empty paths yield ``None``."""
    if not path:
        return None
    try:
        return parse_path(path)
    except InvalidPathError:
        return None


def format_path(segments: tuple[Segment, ...] | list[Segment]) -> str:
    return PATH_SEPARATOR.join(str(s) for s in segments)
