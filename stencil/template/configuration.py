"""Case-insensitive template configuration."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, MutableMapping

# Keys interpreted by the rendering engine. Anything else is carried verbatim.
RECOGNIZED_KEYS = ("path", "extension", "directory", "inherit", "debug", "minify")


def parse_bool(value: Any, *, default: bool = False) -> bool:
    """Interpret a configuration value as a boolean.

    Strings such as ``"yes"`` or ``"0"`` are accepted so that options read
    from the command line or a YAML file behave like real booleans.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, str):
        value_lower = value.strip().lower()
        if value_lower in {"true", "1", "yes", "on"}:
            return True
        if value_lower in {"false", "0", "no", "off", ""}:
            return False
        return default
    return bool(value)


class TemplateConfiguration(MutableMapping[str, Any]):
    """Ordered option bag with case-insensitive keys.

    The casing used when a key was first stored is kept for iteration;
    lookups, updates and deletes ignore case.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._store: dict[str, tuple[str, Any]] = {}
        self.update(data or {}, **kwargs)

    def __setitem__(self, key: str, value: Any) -> None:
        lowered = key.lower()
        original = self._store[lowered][0] if lowered in self._store else key
        self._store[lowered] = (original, value)

    def __getitem__(self, key: str) -> Any:
        return self._store[key.lower()][1]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def lower_items(self) -> Iterator[tuple[str, Any]]:
        return ((lowered, value) for lowered, (_, value) in self._store.items())

    def copy(self) -> TemplateConfiguration:
        return TemplateConfiguration(dict(self.items()))

    def merged(self, overrides: Mapping[str, Any] | None) -> TemplateConfiguration:
        """Return a copy with ``overrides`` applied on top."""
        merged = self.copy()
        merged.update(overrides or {})
        return merged

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        other_lower = {str(k).lower(): v for k, v in other.items()}
        return dict(self.lower_items()) == other_lower

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"

