"""
Spatial type registry and dependency resolution.

The registry stores one SpatialType per name. Definitions are written once at
setup and only read afterwards, so a registry can be shared by any number of
pipeline runs.

Resolution is a topological sort (Kahn's algorithm) over the dependency
closure of the requested types. Types with no ordering constraint between
them come out in declaration order.
"""

from __future__ import annotations

import heapq
import logging
from typing import Callable, Iterable, Iterator, Optional

from pdfextract.errors import (
    ConfigurationError,
    CyclicDependencyError,
    UnknownDependencyError,
    UnknownSpatialTypeError,
)
from pdfextract.models import Builder, SpatialType

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Named spatial types and their declared dependencies.

    Usage:
        registry = TypeRegistry()
        registry.register("text_runs", builder=build_text_runs)

        @registry.spatial("regions", depends_on=["text_runs"])
        def build_regions(ctx):
            ...

        registry.resolve_order({"regions"})   # ('text_runs', 'regions')
    """

    def __init__(self):
        self._types: dict[str, SpatialType] = {}

    def register(
        self,
        name: str,
        depends_on: Iterable[str] = (),
        builder: Optional[Builder] = None,
        description: str = "",
    ) -> SpatialType:
        """Add a spatial type. Fails if the name is already registered."""
        if name in self._types:
            raise ConfigurationError(f"Spatial type {name!r} is already registered")
        spatial_type = SpatialType(
            name=name,
            depends_on=tuple(depends_on),
            builder=builder,
            index=len(self._types),
            description=description,
        )
        self._types[name] = spatial_type
        logger.debug("Registered spatial type %s (depends on %s)", name, spatial_type.depends_on)
        return spatial_type

    def spatial(
        self,
        name: str,
        depends_on: Iterable[str] = (),
        description: str = "",
    ) -> Callable[[Builder], Builder]:
        """Decorator form of ``register``."""
        def decorator(builder: Builder) -> Builder:
            self.register(name, depends_on, builder, description or (builder.__doc__ or "").strip())
            return builder
        return decorator

    def get(self, name: str) -> SpatialType:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownSpatialTypeError(name) from None

    def lookup(self, name: str) -> Optional[SpatialType]:
        return self._types.get(name)

    def names(self) -> list[str]:
        return list(self._types)

    def copy(self) -> "TypeRegistry":
        clone = TypeRegistry()
        clone._types = dict(self._types)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[SpatialType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    # ------------------------------------------------------------------

    def resolve_order(self, requested: Iterable[str]) -> tuple[str, ...]:
        """Execution order for the requested types and everything they need.

        Every dependency precedes its dependents, each type appears once,
        and only types transitively required by ``requested`` are included.

        Raises:
            UnknownSpatialTypeError: a requested type is not registered
            UnknownDependencyError: a declared dependency is not registered
            CyclicDependencyError: the closure contains a cycle
        """
        closure = self._closure(requested)

        dependents: dict[str, list[str]] = {name: [] for name in closure}
        pending: dict[str, int] = {}
        for name in closure:
            deps = set(self._types[name].depends_on)
            pending[name] = len(deps)
            for dep in deps:
                dependents[dep].append(name)

        ready = [(self._types[n].index, n) for n, count in pending.items() if count == 0]
        heapq.heapify(ready)
        order: list[str] = []
        while ready:
            _, name = heapq.heappop(ready)
            order.append(name)
            for dependent in dependents[name]:
                pending[dependent] -= 1
                if pending[dependent] == 0:
                    heapq.heappush(ready, (self._types[dependent].index, dependent))

        if len(order) != len(closure):
            blocked = {name for name, count in pending.items() if count > 0}
            raise CyclicDependencyError(self._find_cycle(blocked))

        logger.debug("Resolved spatial order: %s", " -> ".join(order))
        return tuple(order)

    def validate(self) -> tuple[str, ...]:
        """Resolve the whole registry, surfacing any configuration error."""
        return self.resolve_order(self._types)

    def _closure(self, requested: Iterable[str]) -> set[str]:
        closure: set[str] = set()
        stack = [self.get(name).name for name in requested]
        while stack:
            name = stack.pop()
            if name in closure:
                continue
            closure.add(name)
            for dep in self._types[name].depends_on:
                if dep not in self._types:
                    raise UnknownDependencyError(name, dep)
                stack.append(dep)
        return closure

    def _find_cycle(self, blocked: set[str]) -> list[str]:
        """Walk dependency edges inside ``blocked`` until a type repeats."""
        start = min(blocked, key=lambda n: self._types[n].index)
        path: list[str] = []
        seen: dict[str, int] = {}
        name = start
        while name not in seen:
            seen[name] = len(path)
            path.append(name)
            name = next(dep for dep in self._types[name].depends_on if dep in blocked)
        return path[seen[name]:]
