"""Template rendering engine."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from ..core.errors import DocumentExecutionError, RenderDepthExceeded
from ..core.models import (
    TEMPLATE_POST_PROCESS,
    TEMPLATE_PRE_PROCESS,
    VARIABLES_PRE_PROCESS,
    FilterContext,
    Renderable,
)
from ..core.settings import get_settings
from ..filters.debug import DebugWrapFilter
from ..filters.minify import MinifyFilter
from .executor import DocumentExecutor, JinjaDocumentExecutor
from .io import TextSink
from .paths import validate_document_path

if TYPE_CHECKING:
    from ..template.template import Template

logger = logging.getLogger(__name__)

# Templates currently being rendered on this call stack, by object id.
_LINEAGE: ContextVar[tuple[int, ...]] = ContextVar("stencil_render_lineage", default=())


class RenderState(str, Enum):
    RESOLVING = "Resolving"
    PRE_PROCESSING = "PreProcessing"
    FILTERING_VARIABLES = "FilteringVariables"
    RENDERING_CHILDREN = "RenderingChildren"
    EXECUTING_DOCUMENT = "ExecutingDocument"
    POST_PROCESSING = "PostProcessing"
    DONE = "Done"
    FAILED = "Failed"


class RenderingEngine:
    """Runs a template through the rendering pipeline.

    Args:
        executor: Document executor; Jinja2 by default
        max_depth: Maximum nesting of child templates
    """

    def __init__(
        self,
        executor: Optional[DocumentExecutor] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        self.executor = executor or JinjaDocumentExecutor()
        self.max_depth = max_depth if max_depth is not None else get_settings().max_depth
        self._debug_filter = DebugWrapFilter()
        self._minify_filter = MinifyFilter()

    def render(self, template: Template) -> str:
        """Render ``template`` and return the final buffer.

        Raises:
            DocumentNotFound: If the document cannot be resolved
            RenderDepthExceeded: If children nest deeper than ``max_depth``
        """
        lineage = _LINEAGE.get()
        if len(lineage) >= self.max_depth:
            raise RenderDepthExceeded(
                f"Rendering {template.identifier!r} exceeds the maximum depth of {self.max_depth}"
            )

        token = _LINEAGE.set(lineage + (id(template),))
        try:
            return self._run(template)
        finally:
            _LINEAGE.reset(token)

    def _transition(self, template: Template, state: RenderState) -> None:
        logger.debug(f"[{template.identifier}] {state.value}")

    def _run(self, template: Template) -> str:
        self._transition(template, RenderState.RESOLVING)
        try:
            path = self.resolve(template)
        except Exception:
            self._transition(template, RenderState.FAILED)
            raise

        self._transition(template, RenderState.PRE_PROCESSING)
        context = FilterContext(
            identifier=template.identifier,
            configuration=template.configuration,
            variables=dict(template.variables),
        )
        context = template.dispatch(TEMPLATE_PRE_PROCESS, context).context

        self._transition(template, RenderState.FILTERING_VARIABLES)
        context = template.dispatch(VARIABLES_PRE_PROCESS, context).context

        self._transition(template, RenderState.RENDERING_CHILDREN)
        context.variables = self.render_children(context.variables)

        self._transition(template, RenderState.EXECUTING_DOCUMENT)
        context.buffer = self.execute(template, path, context.variables)

        self._transition(template, RenderState.POST_PROCESSING)
        if template.debug:
            context = self._debug_filter.process(context)
        if template.minify:
            context = self._minify_filter.process(context)
        context = template.dispatch(TEMPLATE_POST_PROCESS, context).context

        self._transition(template, RenderState.DONE)
        return context.buffer

    def resolve(self, template: Template) -> Path:
        return validate_document_path(template.configuration, template.settings)

    def render_children(self, variables: dict[str, Any]) -> dict[str, Any]:
        """Replace every child template in ``variables`` with its output.

        The key of a child is dropped from the scope before it renders, so a
        child never inherits itself. Each child inherits the scope without
        any unrendered templates. A child that is already being rendered
        further up the call stack is consumed and renders as an empty string.
        """
        scope = dict(variables)
        lineage = _LINEAGE.get()

        for key, value in list(scope.items()):
            if not isinstance(value, Renderable):
                continue

            del scope[key]
            if id(value) in lineage:
                logger.warning(
                    f"Child {key!r} is already being rendered; treating it as consumed"
                )
                scope[key] = ""
                continue

            inheritable = {
                name: item for name, item in scope.items() if not isinstance(item, Renderable)
            }
            logger.debug(f"Rendering child {key!r}")
            scope[key] = value.render(inheritable)

        return scope

    def execute(self, template: Template, path: Path, scope: dict[str, Any]) -> str:
        """Run the document executor, containing any execution failure."""
        try:
            return self.executor.execute(
                path,
                scope,
                sink=TextSink(),
                helpers={"assets": template.assets, "active_route": template.active_route},
            )
        except DocumentExecutionError as exc:
            logger.warning(f"[{template.identifier}] {exc}; rendering as empty")
            return ""


@lru_cache(maxsize=1)
def get_default_engine() -> RenderingEngine:
    return RenderingEngine()
