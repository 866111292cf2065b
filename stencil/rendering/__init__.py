"""Rendering pipeline: path resolution, document execution and the engine."""

from .engine import RenderingEngine, RenderState, get_default_engine
from .executor import DocumentExecutor, JinjaDocumentExecutor
from .io import TextSink, atomic_write_text
from .paths import resolve_document_path, validate_document_path

__all__ = [
    "DocumentExecutor",
    "JinjaDocumentExecutor",
    "RenderState",
    "RenderingEngine",
    "TextSink",
    "atomic_write_text",
    "get_default_engine",
    "resolve_document_path",
    "validate_document_path",
]
