"""Limits and defaults for path access and JSON document handling."""

DEFAULT_NOT_FOUND_MESSAGE = "JSON property not found: {path}"
"""Message raised by ``get_required``; ``{path}`` (or ``{0}``) is the path."""

DEFAULT_MAX_DEPTH = 256
"""Maximum nesting depth walked by recursive operations (CWE-674 prevention)."""

MAX_PATH_LENGTH = 4096
"""Maximum length of a dot-notation path string."""

MAX_PATH_SEGMENTS = 256
"""Maximum number of segments in a dot-notation path."""

MAX_ARRAY_INDEX = 65535
"""Largest array index a write may pad up to (CWE-400 prevention)."""

PATH_SEPARATOR = "."

DEFAULT_INDENT = 2
"""Indentation used when persisting documents."""

DEFAULT_LANGUAGE = "en"
