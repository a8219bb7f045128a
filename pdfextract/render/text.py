"""
Plain-text rendering of extraction results.

Each spatial type becomes a heading line followed by one line per object:
the object's content when it has one, its attributes otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdfextract.pipeline import ExtractionResult


def _describe(obj) -> str:
    if "content" in obj:
        prefix = f"[{obj['order']}] " if "order" in obj else ""
        return prefix + " ".join(str(obj["content"]).split())
    return " ".join(f"{key}={value}" for key, value in obj.items())


def render_text(result: "ExtractionResult", explicit_only: bool = True) -> str:
    lines = []
    for name, layer in result.layers.items():
        if explicit_only and not layer.explicit:
            continue
        lines.append(f"== {name} ({len(layer)}) ==")
        lines.extend(_describe(obj) for obj in layer.objects)
        lines.append("")
    return "\n".join(lines)
