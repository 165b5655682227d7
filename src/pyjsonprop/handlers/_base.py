"""Base class for handlers that own a JSON object document."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Any, Self

from pyjsonprop import jsonc
from pyjsonprop._errors import (
    ERR_MSG_HANDLER_CLOSED,
    ERR_MSG_INVALID_DOCUMENT,
    ERR_MSG_NO_BACKING_FILE,
    HandlerClosedError,
    InvalidArgumentError,
    ParseError,
)
from pyjsonprop._values import deep_clone, to_json_value

logger = logging.getLogger(__name__)


def _require_object(document: Any, origin: str) -> dict[str, Any]:
    if not isinstance(document, dict):
        raise ParseError(
            ERR_MSG_INVALID_DOCUMENT,
            f"{origin}: root must be a JSON object, got {type(document).__name__}",
        )
    return document


class JsonDocumentHandler:
    """Owns a JSON object document, optionally backed by a file.

    Mutations made through subclasses replace the document with a new tree
    and, when a backing file is set, write it through immediately. The
    handler does no locking; callers sharing one handler serialize access
    themselves.
    """

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        *,
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        self._document: dict[str, Any] = _require_object(
            {} if document is None else document, type(self).__name__
        )
        self._path = Path(path) if path is not None else None
        self._closed = False

    @classmethod
    def load(cls, path: str | os.PathLike[str], **kwargs: Any) -> Self:
        """Create a handler from a JSON/JSONC file and keep it as backing file.

        Raises:
            OSError: If the file cannot be read.
            ParseError: If the content is malformed or not a JSON object.
        """
        document = _require_object(jsonc.load(path), str(path))
        logger.debug("loaded %s from %s", cls.__name__, path)
        return cls(document, path=path, **kwargs)

    @classmethod
    def from_string(
        cls,
        text: str,
        *,
        path: str | os.PathLike[str] | None = None,
        **kwargs: Any,
    ) -> Self:
        document = _require_object(jsonc.loads(text), "text")
        return cls(document, path=path, **kwargs)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        path: str | os.PathLike[str] | None = None,
        **kwargs: Any,
    ) -> Self:
        return cls(_require_object(to_json_value(data), "data"), path=path, **kwargs)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def document(self) -> dict[str, Any]:
        """A copy of the current document."""
        self._check_open()
        return deep_clone(self._document)

    def _check_open(self) -> None:
        if self._closed:
            raise HandlerClosedError(
                ERR_MSG_HANDLER_CLOSED,
                f"{type(self).__name__} used after close()",
            )

    def _require_path(self) -> Path:
        if self._path is None:
            raise InvalidArgumentError(
                ERR_MSG_NO_BACKING_FILE,
                f"{type(self).__name__} was not created from a file",
            )
        return self._path

    def _replace(self, document: dict[str, Any], persist: bool = True) -> None:
        # Only a document that reached the backing file becomes current.
        if persist and self._path is not None:
            self._write(document)
        self._document = document

    def _write(self, document: dict[str, Any]) -> None:
        path = self._require_path()
        jsonc.dump(document, path)
        logger.debug("saved %s to %s", type(self).__name__, path)

    def save(self) -> None:
        """Write the document to the backing file.

        Raises:
            InvalidArgumentError: If the handler has no backing file.
            OSError: If the file cannot be written.
        """
        self._check_open()
        self._write(self._document)

    def reload(self) -> None:
        """Re-read the backing file, discarding the in-memory document."""
        self._check_open()
        path = self._require_path()
        self._document = _require_object(jsonc.load(path), str(path))
        logger.debug("reloaded %s from %s", type(self).__name__, path)

    def close(self) -> None:
        if not self._closed:
            self._document = {}
            self._closed = True

    def __enter__(self) -> Self:
        self._check_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
