"""The Template entity: identifier, configuration, variables and children."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from ..assets.registry import AssetRegistry
from ..core.errors import BadMethodCall, ChildExtendFailure
from ..core.models import FilterContext, Renderable
from ..core.settings import StencilSettings, get_settings
from ..observer.observable import DEFAULT_PRIORITY, DispatchResult, Observable
from ..rendering.engine import RenderingEngine, get_default_engine
from ..rendering.paths import validate_document_path
from .configuration import TemplateConfiguration, parse_bool

logger = logging.getLogger(__name__)

TemplateFactory = Callable[..., "Template"]

# getPath / setPath / get_path / set_path; any casing.
_ACCESSOR_PATTERN = re.compile(r"^(get|set)_?(\w+)$", re.IGNORECASE)

# Keys whose change alters the resolved document path.
_PATH_KEYS = frozenset({"path", "directory", "extension"})


class Template(Renderable):
    """A named, configured document plus the variables bound to it.

    Args:
        identifier: Name used in diagnostics and as the variable key when the
            template is registered as a child
        config: Configuration options; ``path`` is required and must point to
            an existing document
        engine: Rendering engine, shared with children created by ``extend``
        factory: Callable building child templates for ``extend``; it
            receives ``(identifier, config, engine=, factory=, settings=)``
        settings: Defaults for options missing from ``config``

    Raises:
        DocumentNotFound: If ``path`` is missing, empty or does not exist
    """

    def __init__(
        self,
        identifier: str,
        config: Optional[Mapping[str, Any]] = None,
        *,
        engine: Optional[RenderingEngine] = None,
        factory: Optional[TemplateFactory] = None,
        settings: Optional[StencilSettings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        configuration = TemplateConfiguration(config)
        validate_document_path(configuration, self.settings)

        self._identifier = identifier
        self._configuration = configuration
        self.variables: dict[str, Any] = {}
        self.events = Observable()
        self.assets = AssetRegistry()
        self.engine = engine or get_default_engine()
        self.factory: TemplateFactory = factory or Template
        self.active_route: Optional[str] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._identifier!r}, path={self.path!r})"

    # Variables

    def set(self, name: str, value: Any) -> Template:
        self.variables[name] = value
        return self

    def set_array(self, variables: Mapping[str, Any], replace: bool = False) -> Template:
        """Bind several variables at once.

        Args:
            variables: Name/value pairs
            replace: Replace the whole variable map instead of merging
        """
        if replace:
            self.variables = dict(variables)
        else:
            for name, value in variables.items():
                self.set(name, value)
        return self

    def set_active_route(self, route: Optional[str]) -> Template:
        """Mark ``route`` as current for the ``nav()`` document helper."""
        self.active_route = route
        return self

    # Configuration

    def get_option(self, key: str, default: Any = None) -> Any:
        if key.lower() == "identifier":
            return self._identifier
        return self._configuration.get(key, default)

    def set_option(self, key: str, value: Any) -> Template:
        """Set a configuration option, re-validating the document path.

        Raises:
            DocumentNotFound: If the option change leaves the template
                without an existing document
        """
        lowered = key.lower()
        if lowered == "identifier":
            self._identifier = value
            return self

        if lowered in _PATH_KEYS:
            candidate = self._configuration.copy()
            candidate[key] = value
            validate_document_path(candidate, self.settings)

        self._configuration[key] = value
        return self

    def invoke(self, accessor: str, *args: Any) -> Any:
        """Call a ``get<Key>``/``set<Key>`` style accessor by name.

        Raises:
            BadMethodCall: If the name has no get/set prefix, or a setter is
                called without a value
        """
        match = _ACCESSOR_PATTERN.match(accessor)
        if match is None:
            raise BadMethodCall(f"Call to undefined method {accessor}().")

        prefix, key = match.group(1).lower(), match.group(2)
        if prefix == "get":
            return self.get_option(key)
        if not args:
            raise BadMethodCall(f"Setter {accessor}() requires a value.")
        return self.set_option(key, args[0])

    @property
    def configuration(self) -> Mapping[str, Any]:
        """Read-only view of the options; change them with ``set_option``."""
        return MappingProxyType(self._configuration)

    @property
    def identifier(self) -> str:
        return self._identifier

    @identifier.setter
    def identifier(self, value: str) -> None:
        self._identifier = value

    @property
    def path(self) -> Any:
        return self._configuration.get("path")

    @path.setter
    def path(self, value: Any) -> None:
        self.set_option("path", value)

    @property
    def inherit(self) -> bool:
        return parse_bool(self._configuration.get("inherit"), default=False)

    @property
    def debug(self) -> bool:
        return parse_bool(self._configuration.get("debug"), default=self.settings.debug)

    @property
    def minify(self) -> bool:
        return parse_bool(self._configuration.get("minify"), default=self.settings.minify)

    # Children

    def extend(
        self, identifier: str, overrides: Optional[Mapping[str, Any]] = None
    ) -> Union[Template, ChildExtendFailure]:
        """Create a child from this template's configuration and bind it.

        Returns:
            The child, or a falsy ``ChildExtendFailure`` when it could not be
            constructed
        """
        config = self._configuration.merged(overrides)
        try:
            child = self.factory(
                identifier,
                config,
                engine=self.engine,
                factory=self.factory,
                settings=self.settings,
            )
        except Exception as exc:
            logger.warning(f"Unable to extend {self._identifier!r} with {identifier!r}: {exc}")
            return ChildExtendFailure(identifier, exc)

        self.set(identifier, child)
        return child

    # Events

    def add_listener(
        self, listener: Any, event: str, priority: Union[int, float] = DEFAULT_PRIORITY
    ) -> Template:
        self.events.add_listener(listener, event, priority)
        return self

    def remove_listener(self, listener: Any, event: str) -> bool:
        return self.events.remove_listener(listener, event)

    def has_listeners(self, event: str) -> bool:
        return self.events.has_listeners(event)

    def dispatch(self, event: str, context: FilterContext) -> DispatchResult:
        return self.events.dispatch(event, context)

    # Rendering

    def render(self, inherited: Optional[Mapping[str, Any]] = None) -> str:
        """Render the document and return its text.

        Args:
            inherited: Variables offered by a parent template; merged into
                this template's variables when ``inherit`` is enabled

        Raises:
            DocumentNotFound: If the document no longer exists
        """
        if inherited is not None and self.inherit:
            self.set_array(inherited)

        return self.engine.render(self)
