"""Text sinks for document execution and file output for rendered text."""

from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path


class TextSink:
    """Collects the text a document executor produces.

    Executors write into the sink they are handed instead of relying on any
    ambient output capture, so one sink always holds exactly one document's
    output.
    """

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    def write(self, text: str) -> int:
        return self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def clear(self) -> None:
        self._buffer = io.StringIO()

    def __len__(self) -> int:
        return len(self._buffer.getvalue())


def ensure_parent(path: Path) -> None:
    """Create the directory a rendered document will be written into."""
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Publish rendered output at ``path`` without exposing a partial file.

    The text is written to a sibling temporary file, flushed to disk and
    renamed over ``path``, so readers see either the previous document or
    the complete new one.

    Args:
        path: Where the rendered document goes
        text: Rendered document
        mode: Permission bits applied after the rename
    """
    ensure_parent(path)

    fd, staging = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(staging, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(staging):
            os.remove(staging)
