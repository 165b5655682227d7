"""pyjsonprop - Dot-notation access, merge and projection for JSON documents."""

from __future__ import annotations

try:
    from pyjsonprop._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

from pyjsonprop._accessor import (
    clone_path,
    get,
    get_required,
    merge,
    remove,
    remove_path,
    upsert,
    upsert_many,
)
from pyjsonprop._errors import (
    HandlerClosedError,
    InvalidArgumentError,
    InvalidPathError,
    InvalidPredicateError,
    MaxDepthExceededError,
    NotFoundError,
    ParseError,
    PropError,
)
from pyjsonprop._path import parse_path
from pyjsonprop._predicate import compile_predicate
from pyjsonprop._values import MISSING, deep_clone, json_equal, to_json_value
from pyjsonprop.handlers import ConfigHandler, JsonDocumentHandler, MessageCatalog
from pyjsonprop.projection import ArrayPath, mongo_projection, select_paths, split_paths

__all__ = [
    "clone_path",
    "compile_predicate",
    "deep_clone",
    "get",
    "get_required",
    "json_equal",
    "merge",
    "mongo_projection",
    "parse_path",
    "remove",
    "remove_path",
    "select_paths",
    "split_paths",
    "to_json_value",
    "upsert",
    "upsert_many",
    "ArrayPath",
    "ConfigHandler",
    "JsonDocumentHandler",
    "MessageCatalog",
    "MISSING",
    "HandlerClosedError",
    "InvalidArgumentError",
    "InvalidPathError",
    "InvalidPredicateError",
    "MaxDepthExceededError",
    "NotFoundError",
    "ParseError",
    "PropError",
]
