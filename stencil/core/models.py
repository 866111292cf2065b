"""Domain records threaded through the rendering pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

# Pipeline stages dispatched by the rendering engine.
TEMPLATE_PRE_PROCESS = "Template_PreProcess"
VARIABLES_PRE_PROCESS = "Variables_PreProcess"
TEMPLATE_POST_PROCESS = "Template_PostProcess"

PIPELINE_EVENTS = (TEMPLATE_PRE_PROCESS, VARIABLES_PRE_PROCESS, TEMPLATE_POST_PROCESS)


@dataclass
class FilterContext:
    """Mutable record owned by a single render call."""

    identifier: str
    configuration: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    variables: dict[str, Any] = field(default_factory=dict)
    buffer: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.configuration, MappingProxyType):
            self.configuration = MappingProxyType(dict(self.configuration))

    def copy(self) -> FilterContext:
        """Return a context with its own variable map (values are shared)."""
        return FilterContext(
            identifier=self.identifier,
            configuration=self.configuration,
            variables=dict(self.variables),
            buffer=self.buffer,
        )


ContextCallable = Callable[[FilterContext], Union[FilterContext, None]]


class Renderable(ABC):
    """Anything that can be stored as a variable and rendered as a child."""

    identifier: str

    @abstractmethod
    def render(self, inherited: Optional[Mapping[str, Any]] = None) -> str:
        """Render to text, optionally inheriting variables from a parent."""
