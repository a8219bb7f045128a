"""
Extraction pipeline for pdfextract.

This module orchestrates one document run:
1. Resolve the execution order of the requested spatial types
2. Run each builder in order; builders register event listeners
3. Freeze the listener table and stream every document event through it
4. Run post-stream hooks (types computed from other types' objects)
5. Return the ``type -> objects`` mapping as an ExtractionResult

Design Philosophy:
- The TypeRegistry is write-once and shared; every run builds its own
  Receiver and object lists, so independent documents can run side by side
- Structural errors surface during steps 1-2, before any event is read
- Progress callbacks for CLI integration
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from pdfextract.config import ExtractConfig
from pdfextract.errors import ConfigurationError, UnknownSpatialTypeError
from pdfextract.graph import TypeRegistry
from pdfextract.ingest import EventSource
from pdfextract.models import SpatialLayer, SpatialObject, SpatialType
from pdfextract.receiver import Handler, Receiver

logger = logging.getLogger(__name__)

# Type alias for progress callbacks
ProgressCallback = Callable[[str, float], None]

AfterHook = Callable[[], Optional[Iterable[Mapping[str, Any]]]]


class DependencyView(Sequence):
    """Read-only, live view of a dependency's object list."""

    def __init__(self, name: str, objects: list[SpatialObject]):
        self.name = name
        self._objects = objects

    def __getitem__(self, index):
        return self._objects[index]

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"DependencyView({self.name!r}, {len(self)} objects)"


class BuildContext:
    """Handed to a spatial type's builder while it is the operating type.

    Usage inside a builder::

        def build_text_runs(ctx):
            @ctx.on("show_text_with_positioning")
            def run(page, text, x0, y0, x1, y1, font, size):
                return {"page": page, "content": text, ...}

        def build_references(ctx):
            sections = ctx.objects("sections")

            @ctx.after
            def finish():
                return [entry for s in sections for entry in split_refs(s["content"])]
    """

    def __init__(
        self,
        spatial_type: SpatialType,
        receiver: Receiver,
        objects: dict[str, list[SpatialObject]],
        config: ExtractConfig,
        hooks: list[tuple[str, AfterHook]],
    ):
        self.spatial_type = spatial_type
        self.config = config
        self._receiver = receiver
        self._objects = objects
        self._hooks = hooks

    @property
    def name(self) -> str:
        return self.spatial_type.name

    def on(self, event_name: str) -> Callable[[Handler], Handler]:
        """Register the decorated handler for ``event_name``."""
        return self._receiver.on(event_name)

    def objects(self, type_name: str) -> DependencyView:
        """Objects of a declared dependency.

        The view is live: event-driven dependencies are only complete once the
        document stream has ended, so read it from an ``after`` hook.
        """
        if type_name not in self.spatial_type.depends_on:
            raise ConfigurationError(
                f"Spatial type {self.name!r} reads {type_name!r} "
                f"without declaring it as a dependency"
            )
        return DependencyView(type_name, self._objects[type_name])

    def after(self, hook: AfterHook) -> AfterHook:
        """Run ``hook`` once the document stream has ended.

        The objects it returns are appended to this type's list.
        """
        self._hooks.append((self.name, hook))
        return hook


@dataclass
class ExtractionResult:
    """Result of one pipeline run.

    Layers are kept in execution order. Objects may be altered by the caller
    after the run; nothing downstream observes those changes.
    """
    layers: dict[str, SpatialLayer]
    order: tuple[str, ...]
    config: ExtractConfig
    stats: dict = field(default_factory=dict)

    def layer(self, name: str) -> SpatialLayer:
        try:
            return self.layers[name]
        except KeyError:
            raise UnknownSpatialTypeError(name) from None

    def objects(self, name: str) -> list[SpatialObject]:
        return self.layer(name).objects

    def each(self, name: str) -> Iterator[SpatialObject]:
        """Iterate a type's objects, e.g. to ``alter`` them."""
        return iter(self.objects(name))

    def is_explicit(self, name: str) -> bool:
        return self.layer(name).explicit

    def explicit_types(self) -> list[str]:
        return [name for name, layer in self.layers.items() if layer.explicit]

    def to_dict(self, explicit_only: bool = False) -> dict[str, list[dict]]:
        return {
            name: [dict(obj) for obj in layer.objects]
            for name, layer in self.layers.items()
            if layer.explicit or not explicit_only
        }

    def summary(self) -> str:
        lines = []
        for name, layer in self.layers.items():
            marker = "*" if layer.explicit else " "
            lines.append(f"{marker} {name}: {len(layer)} objects")
        return "\n".join(lines)

    def __contains__(self, name: object) -> bool:
        return name in self.layers

    def __getitem__(self, name: str) -> list[SpatialObject]:
        return self.objects(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.layers)


class SpatialPipeline:
    """Runs spatial type builders over a document event source.

    Usage:
        pipeline = SpatialPipeline()            # built-in spatial types
        result = pipeline.run(["references"], PDFEventSource("paper.pdf"))
        for ref in result.each("references"):
            print(ref["order"], ref["content"])
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        config: Optional[ExtractConfig] = None,
    ):
        if registry is None:
            from pdfextract.spatials import default_registry
            registry = default_registry()
        self.registry = registry
        self.config = config or ExtractConfig()

    def run(
        self,
        requested: Iterable[str],
        source: EventSource,
        progress: Optional[ProgressCallback] = None,
    ) -> ExtractionResult:
        """Build the requested spatial types from one document stream.

        Raises:
            ConfigurationError: unknown, missing or cyclic types, or listeners
                for events the source does not emit. Raised before the
                source is read.
        """
        start = time.time()
        progress = progress or (lambda msg, pct: None)
        requested = list(dict.fromkeys(requested))

        progress("Resolving spatial types...", 0.0)
        order = self.registry.resolve_order(requested)

        objects: dict[str, list[SpatialObject]] = {name: [] for name in order}
        receiver = Receiver(objects, source.event_names)
        hooks: list[tuple[str, AfterHook]] = []

        for name in order:
            spatial_type = self.registry.get(name)
            if spatial_type.builder is None:
                continue
            context = BuildContext(spatial_type, receiver, objects, self.config, hooks)
            with receiver.operating(name):
                spatial_type.builder(context)
        receiver.freeze()

        progress("Streaming document events...", 0.2)
        source.for_each(receiver.dispatch)

        progress("Building derived spatial types...", 0.8)
        for name, hook in hooks:
            produced = hook()
            if produced is None:
                continue
            for obj in produced:
                if not isinstance(obj, SpatialObject):
                    obj = SpatialObject(obj)
                objects[name].append(obj)

        explicit = set(requested)
        layers = {
            name: SpatialLayer(name=name, explicit=name in explicit, objects=objects[name])
            for name in order
        }
        stats = {
            "events": receiver.dispatched,
            "routed_events": receiver.routed,
            "objects": {name: len(layer) for name, layer in layers.items()},
            "duration": time.time() - start,
        }
        logger.info(
            "Extracted %d spatial types from %d events in %.2fs",
            len(order), receiver.dispatched, stats["duration"],
        )
        progress("Complete", 1.0)
        return ExtractionResult(layers=layers, order=order, config=self.config, stats=stats)


def extract(
    pdf_path: str | Path,
    types: Iterable[str],
    config: Optional[ExtractConfig] = None,
    registry: Optional[TypeRegistry] = None,
    pages: Optional[list[int]] = None,
) -> ExtractionResult:
    """Extract the requested spatial types from a PDF file."""
    from pdfextract.ingest.pdf import PDFEventSource

    pipeline = SpatialPipeline(registry=registry, config=config)
    return pipeline.run(types, PDFEventSource(pdf_path, pages=pages))


def convert(
    pdf_path: str | Path,
    types: Iterable[str],
    to: str = "xml",
    config: Optional[ExtractConfig] = None,
) -> str:
    """Extract the requested types and render them as ``xml`` or ``text``."""
    from pdfextract.render import render

    return render(extract(pdf_path, types, config=config), to=to)
