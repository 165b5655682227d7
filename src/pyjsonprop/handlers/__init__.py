"""JSON document handlers built on the path accessor."""

from pyjsonprop.handlers._base import JsonDocumentHandler
from pyjsonprop.handlers.config import ConfigHandler
from pyjsonprop.handlers.language import MessageCatalog

__all__ = [
    "ConfigHandler",
    "JsonDocumentHandler",
    "MessageCatalog",
]
