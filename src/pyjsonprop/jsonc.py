"""JSON-with-comments codec.

Accepts standard JSON plus ``//`` line comments, ``/* */`` block comments and
trailing commas in objects and arrays, as found in ``appsettings.json`` and
``*.jsonc`` configuration files.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from pyjsonprop._constants import DEFAULT_INDENT
from pyjsonprop._errors import ERR_MSG_INVALID_DOCUMENT, ParseError

__all__ = ["dump", "dumps", "load", "loads"]

_GRAMMAR = r"""
    ?start: value

    ?value: object
          | array
          | STRING             -> string
          | NUMBER             -> number
          | "true"             -> true
          | "false"            -> false
          | "null"             -> null

    array: "[" (value ("," value)* ","?)? "]"
    object: "{" (pair ("," pair)* ","?)? "}"
    pair: STRING ":" value

    STRING: /"(?:[^"\\\x00-\x1f]|\\["\\\/bfnrt]|\\u[0-9a-fA-F]{4})*"/
    NUMBER: /-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?/

    LINE_COMMENT: /\/\/[^\n]*/
    BLOCK_COMMENT: /\/\*(.|\n)*?\*\//

    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


class _JsonTransformer(Transformer):
    def string(self, children: list[Token]) -> str:
        return json.loads(children[0])

    def number(self, children: list[Token]) -> int | float:
        text = str(children[0])
        if any(c in text for c in ".eE"):
            return float(text)
        return int(text)

    def true(self, _: list[Any]) -> bool:
        return True

    def false(self, _: list[Any]) -> bool:
        return False

    def null(self, _: list[Any]) -> None:
        return None

    def array(self, children: list[Any]) -> list[Any]:
        return list(children)

    def pair(self, children: list[Any]) -> tuple[str, Any]:
        key, value = children
        return json.loads(key), value

    def object(self, children: list[tuple[str, Any]]) -> dict[str, Any]:
        return dict(children)


_parser = Lark(_GRAMMAR, parser="lalr", transformer=_JsonTransformer())


def loads(text: str | bytes) -> Any:
    """Parse JSON or JSONC text into Python JSON values.

    Raises:
        ParseError: If the text is not well-formed.
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8-sig")
    text = text.lstrip("\ufeff")
    if not text.strip():
        raise ParseError(ERR_MSG_INVALID_DOCUMENT, "document is empty")
    try:
        return _parser.parse(text)
    except UnexpectedInput as exc:
        raise ParseError(
            ERR_MSG_INVALID_DOCUMENT,
            f"unexpected input at line {exc.line}, column {exc.column}",
            wrapped=exc,
        ) from exc
    except VisitError as exc:
        raise ParseError(
            ERR_MSG_INVALID_DOCUMENT,
            f"invalid literal: {exc.orig_exc}",
            wrapped=exc,
        ) from exc


def load(path: str | os.PathLike[str]) -> Any:
    """Read and parse a JSON or JSONC file.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If the content is not well-formed.
    """
    return loads(Path(path).read_text(encoding="utf-8-sig"))


def dumps(value: Any, indent: int | None = DEFAULT_INDENT) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def dump(value: Any, path: str | os.PathLike[str], indent: int | None = DEFAULT_INDENT) -> None:
    """Write ``value`` as indented UTF-8 JSON, replacing the file atomically.

    The document is written to a uniquely named temporary file next to
    ``path`` (tmp + fsync + rename). On failure the temporary file is removed
    and ``path`` is left as it was.

    Raises:
        UnicodeEncodeError: If a string holds an unpaired surrogate.
        OSError: If the file cannot be written.
    """
    target = Path(path)
    data = (dumps(value, indent) + "\n").encode("utf-8")
    target.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
    )
    tmp = Path(handle.name)
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
