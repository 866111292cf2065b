"""Document executors: turn a document and a variable scope into text."""

from __future__ import annotations

import logging
import pprint
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

from jinja2 import ChainableUndefined, Environment, FileSystemLoader, Template, pass_context
from jinja2.runtime import Context
from markupsafe import Markup, escape

from ..core.errors import DocumentExecutionError
from .io import TextSink

logger = logging.getLogger(__name__)


class DocumentExecutor(Protocol):
    """Runs a document against a variable scope.

    Implementations must never fail on an unset variable; it renders as an
    empty value. Any other failure is raised as ``DocumentExecutionError``.
    """

    def execute(
        self,
        path: Path,
        scope: Mapping[str, Any],
        sink: TextSink | None = None,
        helpers: Mapping[str, Any] | None = None,
    ) -> str: ...


def to_string(value: Any) -> str:
    """Render scalars as text and containers as a preformatted dump."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return "" if value is None else str(value)
    return Markup("<pre>") + escape(pprint.pformat(value)) + Markup("</pre>")


def embed(value: Any, default: str = "") -> Any:
    """Return ``value`` unless it is empty, in which case ``default``."""
    return value if value else default


@pass_context
def show(context: Context, name: str, default: Any = "") -> Any:
    """Look up ``name`` in the document scope, falling back to ``default``."""
    value = context.get(name)
    return default if value is None else value


@pass_context
def nav(
    context: Context,
    route: str,
    text: str,
    classes: Sequence[str] = (),
    condition: bool = True,
) -> str:
    """Render a navigation list item linking to ``route``.

    The item is marked active when ``route`` matches the template's active
    route. Nothing is rendered when ``condition`` is false.
    """
    if not condition:
        return ""

    active = route == context.get("active_route")
    item = Markup('<li class="active">') if active else Markup("<li>")
    link_class = Markup(' class="{}"').format(" ".join(classes)) if classes else ""
    return item + Markup('<a href="{}" title="{}"{}>{}</a></li>').format(
        route, text, link_class, text
    )


def _table_rows(data: Any) -> list[tuple[str | None, list[Any]]]:
    items = data.items() if isinstance(data, Mapping) else enumerate(data)
    rows = []
    for header, row in items:
        if isinstance(row, Mapping):
            cells = list(row.values())
        elif isinstance(row, (list, tuple)):
            cells = list(row)
        else:
            cells = [row]
        rows.append((header if isinstance(header, str) else None, cells))
    return rows


def to_table(data: Any, caption: str | None = None) -> Markup:
    """Render ``data`` as an HTML table using the bundled table document.

    Mapping keys that are strings become row headers; each row's values
    become cells.
    """
    template = _bundled_environment().get_template("table.html")
    return Markup(template.render(rows=_table_rows(data), caption=caption))


def build_environment(directory: Path) -> Environment:
    """Create the Jinja2 environment used to execute documents in ``directory``."""
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        undefined=ChainableUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    env.filters["to_string"] = to_string
    env.globals.update(
        to_string=to_string, embed=embed, show=show, nav=nav, to_table=to_table
    )
    return env


# Documents shipped with the package, such as the to_table layout.
BUNDLED_DOCUMENTS = Path(__file__).parent / "documents"


@lru_cache(maxsize=1)
def _bundled_environment() -> Environment:
    return build_environment(BUNDLED_DOCUMENTS)


class JinjaDocumentExecutor:
    """Executes documents as Jinja2 templates."""

    def load(self, path: Path) -> Template:
        """Load a Jinja2 template from a file path.

        Args:
            path: Path to the document

        Returns:
            Compiled Jinja2 template
        """
        if not path.exists():
            raise DocumentExecutionError(path, "document not found")

        # Use the document's directory as the loader search path so that
        # {% include %} and {% extends %} resolve relative to it.
        env = build_environment(path.parent)
        return env.get_template(path.name)

    def execute(
        self,
        path: Path,
        scope: Mapping[str, Any],
        sink: TextSink | None = None,
        helpers: Mapping[str, Any] | None = None,
    ) -> str:
        """Run the document at ``path`` and return its output.

        Args:
            path: Document to execute
            scope: Variables visible to the document
            sink: Where output is written; a fresh sink when omitted
            helpers: Extra globals such as the template's asset registry

        Raises:
            DocumentExecutionError: If the document cannot be loaded or fails
                while executing
        """
        sink = sink if sink is not None else TextSink()
        logger.debug(f"Executing document: {path}")

        try:
            template = self.load(path)
            for chunk in template.generate({**(helpers or {}), **scope}):
                sink.write(chunk)
        except DocumentExecutionError:
            raise
        except Exception as exc:
            raise DocumentExecutionError(path, str(exc)) from exc

        return sink.getvalue()
