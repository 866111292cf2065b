from __future__ import annotations

import re

from ..core.models import FilterContext
from .base import BufferFilter

# <pre> and <textarea> bodies are copied through untouched.
_PROTECTED_BLOCK = re.compile(
    r"<(pre|textarea)\b.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)

# ASCII whitespace only: a no-break space is content, not layout.
_COLLAPSIBLE_WHITESPACE = re.compile(
    r"""
        [\t\n\r\f\v][ \t\n\r\f\v]*  # a non-space whitespace character and any run after it
      | [ \t\n\r\f\v]{2,}           # or two or more consecutive whitespace characters
    """,
    re.VERBOSE,
)


def _collapse(segment: str) -> str:
    return _COLLAPSIBLE_WHITESPACE.sub(" ", segment)


def minify_html(buffer: str) -> str:
    if not buffer:
        return buffer

    parts = []
    position = 0
    for block in _PROTECTED_BLOCK.finditer(buffer):
        parts.append(_collapse(buffer[position : block.start()]))
        parts.append(block.group(0))
        position = block.end()
    parts.append(_collapse(buffer[position:]))

    return "".join(parts)


class MinifyFilter(BufferFilter):
    """Collapses runs of whitespace in the rendered document."""

    def filter_buffer(self, buffer: str, context: FilterContext) -> str:
        return minify_html(buffer)
