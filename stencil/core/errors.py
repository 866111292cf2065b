"""Error taxonomy for template construction and rendering."""

from __future__ import annotations


class StencilError(Exception):
    """Base class for all stencil errors."""


class DocumentNotFound(StencilError, FileNotFoundError):
    """Raised when a template's document path is missing or does not exist."""


class BadMethodCall(StencilError, AttributeError):
    """Raised when an accessor name is neither a getter nor a setter."""


class DocumentExecutionError(StencilError):
    """Raised by a document executor when a document fails to execute."""

    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"Failed to execute document {path}: {message}")
        self.path = path


class RenderDepthExceeded(StencilError):
    """Raised when nested child rendering goes deeper than the configured cap."""


class ChildExtendFailure:
    """Falsy result of a failed ``Template.extend`` call.

    Carries the requested identifier and the exception that prevented the
    child from being built, so callers can check ``if not child`` and still
    inspect what went wrong.
    """

    __slots__ = ("identifier", "error")

    def __init__(self, identifier: str, error: Exception) -> None:
        self.identifier = identifier
        self.error = error

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"ChildExtendFailure({self.identifier!r}, {self.error!r})"
