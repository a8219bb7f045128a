"""
Event source protocol and an in-memory implementation.

An event source produces a single forward-only sequence of named low-level
events. The pipeline only needs:

- ``event_names``: the vocabulary of events the source can emit (empty when
  unknown), used to reject listeners for events that will never arrive
- ``for_each(callback)``: call ``callback(event_name, *args)`` once per event
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Protocol, runtime_checkable

EventCallback = Callable[..., None]


@runtime_checkable
class EventSource(Protocol):
    event_names: frozenset[str]

    def for_each(self, callback: EventCallback) -> None:
        ...


class EventStream:
    """Replays a list of ``(event_name, args)`` pairs.

    Usage:
        stream = EventStream([
            ("begin_page", (0, 612.0, 792.0)),
            ("show_text_with_positioning", (0, "Hello", 72, 72, 110, 84, "helv", 11.0)),
        ])
    """

    def __init__(
        self,
        events: Iterable[tuple[str, Iterable[Any]]],
        event_names: Optional[Iterable[str]] = None,
    ):
        self.events = [(name, tuple(args)) for name, args in events]
        self.event_names = frozenset(event_names or ())

    def for_each(self, callback: EventCallback) -> None:
        for name, args in self.events:
            callback(name, *args)

    def __len__(self) -> int:
        return len(self.events)
