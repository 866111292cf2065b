"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import DocumentNotFound, StencilError
from ..core.models import VARIABLES_PRE_PROCESS
from ..core.settings import get_settings
from ..filters.escape import EscapeFilter
from ..rendering.io import atomic_write_text
from ..rendering.paths import resolve_document_path
from ..template.template import Template
from .parsers import load_vars_file, parse_child, parse_file_mode, parse_var

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="stencil",
    help="Render templates through the stencil filter pipeline.",
)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.command()
def render(
    template_path: Annotated[
        Path,
        typer.Argument(help="Document to render.", metavar="TEMPLATE"),
    ],
    variables: Annotated[
        list[str],
        typer.Option(
            "--var",
            help="Bind a variable (format: NAME=VALUE). Repeatable.",
            metavar="NAME=VALUE",
        ),
    ] = [],
    vars_file: Annotated[
        Optional[Path],
        typer.Option(
            "--vars-file",
            help="YAML or JSON mapping of variables to bind.",
            metavar="FILE",
        ),
    ] = None,
    children: Annotated[
        list[str],
        typer.Option(
            "--child",
            help="Extend with a child document bound as NAME (format: NAME=TEMPLATE). Repeatable.",
            metavar="NAME=TEMPLATE",
        ),
    ] = [],
    escape: Annotated[
        bool,
        typer.Option("--escape", help="HTML-escape string variables before rendering."),
    ] = False,
    minify: Annotated[
        Optional[bool],
        typer.Option(
            "--minify/--no-minify",
            help="Collapse whitespace in the rendered output (default: STENCIL_MINIFY).",
        ),
    ] = None,
    debug: Annotated[
        Optional[bool],
        typer.Option(
            "--debug/--no-debug",
            help="Wrap each template's output in debug comments (default: STENCIL_DEBUG).",
        ),
    ] = None,
    inherit: Annotated[
        bool,
        typer.Option("--inherit", help="Let child documents inherit the parent's variables."),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the result to FILE instead of stdout.", metavar="FILE"),
    ] = None,
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal for --output (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render TEMPLATE with the given variables and child documents."""
    _configure_logging(verbose)

    logger.debug("Starting stencil")

    # Parse configuration
    bound = load_vars_file(vars_file) if vars_file else {}
    bound.update(parse_var(value) for value in variables)
    child_specs = [parse_child(value) for value in children]
    mode = parse_file_mode(file_mode)

    # Unset flags fall back to StencilSettings.
    config: dict[str, object] = {"path": str(template_path)}
    if debug is not None:
        config["debug"] = debug
    if minify is not None:
        config["minify"] = minify

    try:
        template = Template(template_path.stem, config)
    except DocumentNotFound as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    template.set_array(bound)

    for name, child_path in child_specs:
        child = template.extend(name, {"path": str(child_path), "inherit": inherit})
        if not child:
            typer.echo(f"Error: cannot load child {name!r}: {child.error}", err=True)
            raise typer.Exit(code=1)

    if escape:
        template.add_listener(EscapeFilter(), VARIABLES_PRE_PROCESS)

    logger.debug(f"Config: {len(bound)} variable(s), {len(child_specs)} child(ren)")

    try:
        result = template.render()
    except StencilError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output is None:
        typer.echo(result, nl=False)
        return

    atomic_write_text(output, result, mode=mode)
    logger.info(f"Rendered {template_path} → {output}")


@app.command()
def check(
    template_path: Annotated[
        Path,
        typer.Argument(help="Document to check.", metavar="TEMPLATE"),
    ],
    directory: Annotated[
        str,
        typer.Option("--directory", help="Directory relative paths resolve against.", metavar="DIR"),
    ] = "",
    extension: Annotated[
        str,
        typer.Option("--extension", help="Extension appended to the document name.", metavar="EXT"),
    ] = "",
) -> None:
    """Resolve TEMPLATE and report whether the document exists."""
    config = {"path": str(template_path)}
    if directory:
        config["directory"] = directory
    if extension:
        config["extension"] = extension

    try:
        resolved = resolve_document_path(config)
    except DocumentNotFound as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not resolved.is_file():
        typer.echo(f"Missing: {resolved}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"OK: {resolved}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
