"""Command-line interface for stencil."""

from .app import app, main

__all__ = ["app", "main"]
