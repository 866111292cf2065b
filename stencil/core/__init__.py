"""Core records, errors and settings shared by every stencil component."""

from .errors import (
    BadMethodCall,
    ChildExtendFailure,
    DocumentExecutionError,
    DocumentNotFound,
    RenderDepthExceeded,
    StencilError,
)
from .models import (
    PIPELINE_EVENTS,
    TEMPLATE_POST_PROCESS,
    TEMPLATE_PRE_PROCESS,
    VARIABLES_PRE_PROCESS,
    FilterContext,
    Renderable,
)
from .settings import StencilSettings, get_settings

__all__ = [
    "BadMethodCall",
    "ChildExtendFailure",
    "DocumentExecutionError",
    "DocumentNotFound",
    "FilterContext",
    "PIPELINE_EVENTS",
    "RenderDepthExceeded",
    "Renderable",
    "StencilError",
    "StencilSettings",
    "TEMPLATE_POST_PROCESS",
    "TEMPLATE_PRE_PROCESS",
    "VARIABLES_PRE_PROCESS",
    "get_settings",
]
