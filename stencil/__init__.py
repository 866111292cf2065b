"""Stencil - an event-driven templating engine.

Templates bind variables to a document, compose child templates into their
parent's scope and expose pipeline events that filters hook into.
"""

__version__ = "0.4.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core import (
    TEMPLATE_POST_PROCESS,
    TEMPLATE_PRE_PROCESS,
    VARIABLES_PRE_PROCESS,
    BadMethodCall,
    ChildExtendFailure,
    DocumentExecutionError,
    DocumentNotFound,
    FilterContext,
    RenderDepthExceeded,
    StencilError,
)
from .filters import (
    BufferFilter,
    DebugWrapFilter,
    EscapeFilter,
    MinifyFilter,
    VariableFilter,
)
from .observer import Observable
from .rendering import JinjaDocumentExecutor, RenderingEngine
from .template import Template

__all__ = [
    "BadMethodCall",
    "BufferFilter",
    "ChildExtendFailure",
    "DebugWrapFilter",
    "DocumentExecutionError",
    "DocumentNotFound",
    "EscapeFilter",
    "FilterContext",
    "JinjaDocumentExecutor",
    "MinifyFilter",
    "Observable",
    "RenderDepthExceeded",
    "RenderingEngine",
    "StencilError",
    "TEMPLATE_POST_PROCESS",
    "TEMPLATE_PRE_PROCESS",
    "Template",
    "VARIABLES_PRE_PROCESS",
    "VariableFilter",
]
