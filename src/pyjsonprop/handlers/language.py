"""Localized message catalog backed by a JSON document.

The document maps language codes to nested messages::

    {
      "en": {"greeting": "Hello", "errors": {"not_found": "Not found"}},
      "id": {"greeting": "Halo"}
    }
"""

from __future__ import annotations

import os
from typing import Any

from pyjsonprop._accessor import get, upsert
from pyjsonprop._constants import DEFAULT_LANGUAGE, PATH_SEPARATOR
from pyjsonprop.handlers._base import JsonDocumentHandler


class MessageCatalog(JsonDocumentHandler):
    """Looks up messages by language and dot path, falling back to the
    default language and finally to the path itself."""

    def __init__(
        self,
        document: dict[str, Any] | None = None,
        *,
        path: str | os.PathLike[str] | None = None,
        default_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        super().__init__(document, path=path)
        self._default_language = default_language

    @property
    def default_language(self) -> str:
        return self._default_language

    def get_message(self, path: str, language: str | None = None) -> str:
        self._check_open()
        language = language or self._default_language
        message = get(self._document, _join(language, path), as_type=str)
        if message is None and language != self._default_language:
            message = get(self._document, _join(self._default_language, path), as_type=str)
        return path if message is None else message

    def update_message(self, language: str, path: str, value: str, save: bool = True) -> None:
        """Set the message at ``path`` for ``language``.

        Args:
            language: Language code, e.g. ``"en"``.
            path: Message path in dot notation.
            value: The message text.
            save: Write the catalog through to its backing file, if any.

        Raises:
            InvalidPathError: If the path is empty or malformed.
        """
        self._check_open()
        self._replace(upsert(self._document, _join(language, path), value), persist=save)

    def available_languages(self) -> list[str]:
        self._check_open()
        return list(self._document)


def _join(language: str, path: str) -> str:
    return f"{language}{PATH_SEPARATOR}{path}" if path else ""
