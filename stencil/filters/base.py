"""Filter shapes that plug into the event dispatcher."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from ..core.models import FilterContext, Renderable

logger = logging.getLogger(__name__)


class BufferFilter(ABC):
    """Transforms the rendered document text as a whole.

    Register on ``Template_PostProcess``. The pipeline does not deduplicate,
    so registering a buffer filter twice applies it twice.
    """

    def process(self, context: FilterContext) -> FilterContext:
        context.buffer = self.filter_buffer(context.buffer, context)
        return context

    @abstractmethod
    def filter_buffer(self, buffer: str, context: FilterContext) -> str:
        """Return the transformed buffer."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class VariableFilter(ABC):
    """Transforms every scalar leaf of the variable tree.

    Mappings, lists and tuples are walked depth-first and rebuilt; child
    templates are leaves that pass through untouched since they are rendered
    as their own stage.
    """

    def process(self, context: FilterContext) -> FilterContext:
        context.variables = self._walk_mapping(context.variables)
        return context

    def _walk_mapping(self, variables: Mapping[str, Any]) -> dict[str, Any]:
        return {key: self._walk(value, key) for key, value in variables.items()}

    def _walk(self, value: Any, key: Any) -> Any:
        if isinstance(value, Renderable):
            return value
        if isinstance(value, Mapping):
            return self._walk_mapping(value)
        if isinstance(value, list):
            return [self._walk(item, index) for index, item in enumerate(value)]
        if isinstance(value, tuple):
            return tuple(self._walk(item, index) for index, item in enumerate(value))
        return self.filter_value(value, key)

    @abstractmethod
    def filter_value(self, value: Any, key: Any) -> Any:
        """Return the transformed leaf value."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
