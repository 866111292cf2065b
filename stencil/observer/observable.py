"""Priority-ordered publish/subscribe used to hook filters into the pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from ..core.models import FilterContext

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 5


@dataclass
class DispatchResult:
    """Outcome of a dispatch: truthy when at least one listener ran."""

    delivered: bool
    context: FilterContext

    def __bool__(self) -> bool:
        return self.delivered


def _as_callable(listener: Any) -> Callable[[FilterContext], Any]:
    """Return the callable behind a listener handle.

    Filters are registered as objects and invoked through ``process``; plain
    functions are invoked directly.
    """
    process = getattr(listener, "process", None)
    if callable(process):
        return process
    if callable(listener):
        return listener
    raise TypeError(
        f"Listener must be callable or expose process(context), got {type(listener).__name__}"
    )


class Observable:
    """Event dispatcher keyed by event name, then priority.

    Priorities are dispatched in ascending order, so a listener registered
    at priority 1 always runs before one at priority 5 regardless of which
    was added first. Listeners sharing a priority run in registration order.
    Registering the same listener twice produces two entries.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, dict[Union[int, float], list[Any]]] = {}

    def add_listener(
        self, listener: Any, event: str, priority: Union[int, float] = DEFAULT_PRIORITY
    ) -> None:
        """Register ``listener`` for ``event``.

        Raises:
            TypeError: If the listener cannot be invoked, or ``priority`` is
                not a number (buckets are ordered numerically)
        """
        _as_callable(listener)
        if isinstance(priority, bool) or not isinstance(priority, (int, float)):
            raise TypeError(f"Listener priority must be a number, got {priority!r}")
        buckets = self._listeners.setdefault(event, {})
        buckets.setdefault(priority, []).append(listener)
        logger.debug(f"Added listener {listener!r} to {event} at priority {priority}")

    def remove_listener(self, listener: Any, event: str) -> bool:
        """Remove one occurrence of ``listener`` from ``event``.

        Returns:
            True if a registration was removed
        """
        buckets = self._listeners.get(event)
        if not buckets:
            return False

        for priority in sorted(buckets):
            bucket = buckets[priority]
            if listener in bucket:
                bucket.remove(listener)
                if not bucket:
                    del buckets[priority]
                if not buckets:
                    del self._listeners[event]
                logger.debug(f"Removed listener {listener!r} from {event}")
                return True

        return False

    def has_listeners(self, event: str) -> bool:
        return any(self._listeners.get(event, {}).values())

    def listeners(self, event: str) -> list[Any]:
        """Return the listeners for ``event`` in dispatch order."""
        buckets = self._listeners.get(event, {})
        return [listener for priority in sorted(buckets) for listener in buckets[priority]]

    def clear_listeners(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def dispatch(self, event: str, context: FilterContext) -> DispatchResult:
        """Run every listener of ``event`` as a pipeline over ``context``.

        Each listener receives the context returned by the previous one. A
        listener returning ``None`` is taken to have mutated the context in
        place.

        Args:
            event: Event name to dispatch
            context: Context handed to the first listener

        Returns:
            Dispatch result carrying the final context
        """
        if not self.has_listeners(event):
            return DispatchResult(delivered=False, context=context)

        handlers = self.listeners(event)
        logger.debug(f"Dispatching {event} to {len(handlers)} listener(s)")

        for listener in handlers:
            result = _as_callable(listener)(context)
            if result is not None:
                context = result

        return DispatchResult(delivered=True, context=context)
