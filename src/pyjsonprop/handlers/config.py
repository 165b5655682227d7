"""Configuration file handler (``appsettings.json`` / ``appconfigs.jsonc``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyjsonprop._accessor import get, get_required, merge, remove, remove_path, upsert, upsert_many
from pyjsonprop._constants import DEFAULT_NOT_FOUND_MESSAGE
from pyjsonprop._predicate import Predicate
from pyjsonprop.handlers._base import JsonDocumentHandler


class ConfigHandler(JsonDocumentHandler):
    """Reads and updates a configuration document by dot-notation paths.

    Every mutation is written through to the backing file, if any.

    Example:
        >>> with ConfigHandler.from_dict({"app": {"name": "demo"}}) as config:
        ...     config.update("app.version", "1.0.0")
        ...     config.get("app.version")
        '1.0.0'
    """

    def get(self, path: str, default: Any = None, *, as_type: Any = None) -> Any:
        self._check_open()
        return get(self._document, path, default, as_type=as_type)

    def get_required(
        self,
        path: str,
        message: str = DEFAULT_NOT_FOUND_MESSAGE,
        *,
        as_type: Any = None,
    ) -> Any:
        """Read a setting that must exist.

        Raises:
            NotFoundError: If the path does not resolve.
        """
        self._check_open()
        return get_required(self._document, path, message, as_type=as_type)

    def update(self, path: str, value: Any) -> None:
        """Set ``path`` to ``value`` and persist.

        Raises:
            InvalidPathError: If the path is empty or malformed.
            InvalidArgumentError: If ``value`` has no JSON representation.
            OSError: If persisting fails.
        """
        self._check_open()
        self._replace(upsert(self._document, path, value))

    def update_many(self, updates: Mapping[str, Any]) -> None:
        self._check_open()
        self._replace(upsert_many(self._document, updates))

    def remove(self, path: str) -> None:
        """Delete the setting at ``path`` (a no-op if absent) and persist."""
        self._check_open()
        self._replace(remove_path(self._document, path))

    def remove_where(self, predicate: Predicate | str, recursive: bool = True) -> None:
        self._check_open()
        self._replace(remove(self._document, predicate, recursive))

    def merge(self, other: dict[str, Any], merge_arrays: bool = False) -> None:
        """Deep-merge ``other`` over the current settings and persist."""
        self._check_open()
        self._replace(merge(self._document, other, merge_arrays))
