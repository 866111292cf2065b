"""Document path resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ..core.errors import DocumentNotFound
from ..core.settings import StencilSettings, get_settings

logger = logging.getLogger(__name__)


def resolve_document_path(
    configuration: Mapping[str, Any], settings: StencilSettings | None = None
) -> Path:
    """Compute the document path described by ``configuration``.

    ``path`` is joined onto ``directory`` when it is relative, and
    ``extension`` is appended when the path does not already end with it.
    """
    settings = settings or get_settings()
    raw_path = configuration.get("path")
    if raw_path is None or str(raw_path).strip() == "":
        raise DocumentNotFound("A document path is required to initialise a template.")

    path = Path(raw_path)

    directory = configuration.get("directory") or settings.directory
    if directory and not path.is_absolute():
        path = Path(directory) / path

    extension = configuration.get("extension")
    if extension is None:
        extension = settings.extension
    if extension and not path.name.endswith(extension):
        path = path.with_name(path.name + extension)

    return path


def validate_document_path(
    configuration: Mapping[str, Any], settings: StencilSettings | None = None
) -> Path:
    """Resolve the document path and ensure it points to an existing file."""
    path = resolve_document_path(configuration, settings)
    if not path.is_file():
        raise DocumentNotFound(f"Unable to find document: {path}")
    logger.debug(f"Resolved document path: {path}")
    return path
