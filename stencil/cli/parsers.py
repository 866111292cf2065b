"""CLI argument parsers and validators."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import typer
import yaml

_INT_PATTERN = re.compile(r"^-?\d+$")
_FLOAT_PATTERN = re.compile(r"^-?\d+(?:\.\d+)?$")


def coerce_value(value: str) -> bool | int | float | str:
    """Turn the text of a ``--var`` value into the type a document expects.

    ``true``/``false`` (any case) become booleans and numeric literals become
    ``int`` or ``float``; anything else stays a string.
    """
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    for pattern, convert in ((_INT_PATTERN, int), (_FLOAT_PATTERN, float)):
        if pattern.match(value):
            try:
                return convert(value)
            except (ValueError, OverflowError):
                return value

    return value


def parse_assignment(value: str, metavar: str = "NAME=VALUE") -> tuple[str, str]:
    """Split a NAME=VALUE argument."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be {metavar}, got: {value!r}")
    name, raw = value.split("=", 1)
    name = name.strip()
    if not name:
        raise typer.BadParameter(f"Missing name in {value!r}")
    return name, raw


def parse_var(value: str) -> tuple[str, Any]:
    """Parse a --var argument in format NAME=VALUE."""
    name, raw = parse_assignment(value)
    return name, coerce_value(raw)


def parse_child(value: str) -> tuple[str, Path]:
    """Parse a --child argument in format NAME=TEMPLATE."""
    name, raw = parse_assignment(value, "NAME=TEMPLATE")
    return name, Path(raw)


def parse_file_mode(value: str) -> int:
    """Read the ``--mode`` permission bits, given in octal such as ``0640``."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"--mode expects octal permissions, got {value!r}") from e


def load_vars_file(path: Path) -> dict[str, Any]:
    """Load template variables from a YAML (or JSON) mapping file."""
    if not path.is_file():
        raise typer.BadParameter(f"Variables file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Invalid variables file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Variables file must contain a mapping: {path}")

    return {str(key): value for key, value in data.items()}
