from __future__ import annotations

import re
from typing import Any

from markupsafe import escape

from .base import VariableFilter

# Lone surrogates cannot be UTF-8 encoded; they are replaced like any other
# invalid code unit sequence.
_SURROGATES = re.compile(r"[\ud800-\udfff]")


def escape_html(value: str) -> str:
    """HTML-escape ``& < > " '`` and substitute invalid sequences."""
    return str(escape(_SURROGATES.sub("\ufffd", value)))


class EscapeFilter(VariableFilter):
    """Escapes string variables before they reach the document."""

    def filter_value(self, value: Any, key: Any) -> Any:
        if isinstance(value, str):
            return escape_html(value)
        return value
