"""Exception hierarchy for JSON path access and document handling."""


class PropError(Exception):
    """Base exception for path access errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (CWE-209 prevention).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def __str__(self) -> str:
        return self.user_message

    def internal(self) -> str:
        return self.internal_details


class NotFoundError(PropError, KeyError):
    """Raised when a required path resolves to nothing."""


class InvalidArgumentError(PropError, ValueError):
    """Raised when an argument is empty, missing, or of an unsupported type."""


class InvalidPathError(InvalidArgumentError):
    """Raised when a dot-notation path is malformed or cannot be written."""


class InvalidPredicateError(InvalidArgumentError):
    """Raised when a predicate expression fails to compile."""


class MaxDepthExceededError(PropError):
    """Raised when a document is nested deeper than the recursion limit."""


class ParseError(PropError, ValueError):
    """Raised when JSON or JSONC text cannot be parsed."""


class HandlerClosedError(PropError):
    """Raised when a document handler is used after it was closed."""


# Sanitized user-facing error message constants
ERR_MSG_EMPTY_PATH = "path cannot be empty"
ERR_MSG_INVALID_PATH = "invalid path"
ERR_MSG_INVALID_INDEX = "array index out of range"
ERR_MSG_UNSUPPORTED_VALUE = "unsupported value type"
ERR_MSG_INVALID_DOCUMENT = "invalid JSON document"
ERR_MSG_DEPTH_EXCEEDED = "maximum nesting depth exceeded"
ERR_MSG_INVALID_PREDICATE = "invalid predicate expression"
ERR_MSG_HANDLER_CLOSED = "handler is closed"
ERR_MSG_NO_BACKING_FILE = "handler has no backing file"
