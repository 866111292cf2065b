"""Built-in pipeline filters and the base classes for custom ones."""

from .base import BufferFilter, VariableFilter
from .debug import DebugWrapFilter, debug_wrap
from .escape import EscapeFilter, escape_html
from .minify import MinifyFilter, minify_html

__all__ = [
    "BufferFilter",
    "DebugWrapFilter",
    "EscapeFilter",
    "MinifyFilter",
    "VariableFilter",
    "debug_wrap",
    "escape_html",
    "minify_html",
]
