from __future__ import annotations

from ..core.models import FilterContext
from .base import BufferFilter


def debug_wrap(buffer: str, identifier: str) -> str:
    """Surround ``buffer`` with HTML comments naming the template."""
    if not buffer:
        return f"<!-- [Stencil]: Empty Stencil '{identifier}' -->"
    return "\n".join(
        (
            f"<!-- [Stencil]: Start '{identifier}' -->",
            buffer,
            f"<!-- [Stencil]: End '{identifier}' -->",
        )
    )


class DebugWrapFilter(BufferFilter):
    """Marks where each template's output starts and ends."""

    def filter_buffer(self, buffer: str, context: FilterContext) -> str:
        return debug_wrap(buffer, context.identifier)
