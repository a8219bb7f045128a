"""
Event receiver: routes low-level document events into spatial types.

The receiver works in two phases:

1. Registration. While a spatial type's builder runs inside
   ``receiver.operating(name)``, it registers handlers for event names.
   Registrations for an event name that is already bound are merged, so one
   event can feed several types.
2. Dispatch. ``freeze()`` turns the registrations into an immutable
   ListenerTable. ``dispatch(event_name, *args)`` then only reads that table
   and appends whatever the handlers return to the owning type's objects.

Event names without a listener are ignored; a document stream carries many
operators the pipeline does not care about.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, MutableMapping, Optional

from pdfextract.errors import (
    ConfigurationError,
    ReentrantDispatchError,
    UnknownEventError,
)
from pdfextract.models import SpatialObject

logger = logging.getLogger(__name__)

Handler = Callable[..., Optional[Mapping[str, Any]]]


@dataclass(frozen=True)
class Listener:
    """All (owning type, handler) bindings for one event name."""
    event_name: str
    bindings: tuple[tuple[str, Handler], ...]

    @property
    def owning_types(self) -> tuple[str, ...]:
        return tuple(owner for owner, _ in self.bindings)

    def merged(self, owning_type: str, handler: Handler) -> "Listener":
        return Listener(self.event_name, self.bindings + ((owning_type, handler),))


ListenerTable = Mapping[str, Listener]


class Receiver:
    """Binds event names to spatial type handlers for one document run.

    Args:
        objects: per-run ``type name -> object list`` storage the receiver
            appends to. Only lists of types that register listeners are used.
        event_names: vocabulary of the document source. When given, listening
            for any other name is a configuration error.
    """

    def __init__(
        self,
        objects: MutableMapping[str, list[SpatialObject]],
        event_names: Optional[frozenset[str]] = None,
    ):
        self._objects = objects
        self._event_names = event_names or None
        self._listeners: dict[str, Listener] = {}
        self._table: Optional[ListenerTable] = None
        self._operating_type: Optional[str] = None
        self._dispatching = False
        self.dispatched = 0
        self.routed = 0

    @property
    def operating_type(self) -> Optional[str]:
        return self._operating_type

    @property
    def frozen(self) -> bool:
        return self._table is not None

    @contextmanager
    def operating(self, type_name: str) -> Iterator["Receiver"]:
        """Mark ``type_name`` as the type whose builder is registering."""
        if self.frozen:
            raise ConfigurationError("Listeners are frozen; no builder may run now")
        previous = self._operating_type
        self._operating_type = type_name
        try:
            yield self
        finally:
            self._operating_type = previous

    def register_listener(self, event_name: str, owning_type: str, handler: Handler) -> None:
        if self.frozen:
            raise ConfigurationError(
                f"Cannot listen for {event_name!r} after the document stream started"
            )
        if self._event_names is not None and event_name not in self._event_names:
            raise UnknownEventError(event_name, owning_type)
        existing = self._listeners.get(event_name)
        if existing is None:
            self._listeners[event_name] = Listener(event_name, ((owning_type, handler),))
        else:
            logger.debug(
                "Merging listener for %s: %s + %s",
                event_name, ", ".join(existing.owning_types), owning_type,
            )
            self._listeners[event_name] = existing.merged(owning_type, handler)
        self._objects.setdefault(owning_type, [])

    def on(self, event_name: str) -> Callable[[Handler], Handler]:
        """Decorator registering a handler for the operating type."""
        def decorator(handler: Handler) -> Handler:
            if self._operating_type is None:
                raise ConfigurationError(
                    f"Listener for {event_name!r} registered outside a spatial type builder"
                )
            self.register_listener(event_name, self._operating_type, handler)
            return handler
        return decorator

    def freeze(self) -> ListenerTable:
        """End the registration phase and return the read-only listener table."""
        if self._table is None:
            self._table = MappingProxyType(dict(self._listeners))
            logger.debug("Listening for events: %s", ", ".join(sorted(self._table)) or "(none)")
        return self._table

    def dispatch(self, event_name: str, *args: Any) -> None:
        """Route one document event to its listener, if any."""
        if self._table is None:
            raise ConfigurationError("dispatch() called before listeners were frozen")
        if self._dispatching:
            raise ReentrantDispatchError(
                f"Event {event_name!r} dispatched from inside a listener handler"
            )
        self.dispatched += 1
        listener = self._table.get(event_name)
        if listener is None:
            return

        self._dispatching = True
        try:
            for owning_type, handler in listener.bindings:
                produced = handler(*args)
                if produced is None:
                    continue
                if not isinstance(produced, SpatialObject):
                    produced = SpatialObject(produced)
                self._objects[owning_type].append(produced)
                self.routed += 1
        finally:
            self._dispatching = False
