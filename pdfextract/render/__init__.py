"""
Renderers for extraction results.

- xml: one container element per spatial type, one child per object (lxml)
- text: one heading per spatial type, one line per object

Only explicitly requested types are rendered unless ``explicit_only`` is
turned off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdfextract.render.text import render_text
from pdfextract.render.xml import XMLRenderConfig, XMLRenderer, render_xml

if TYPE_CHECKING:
    from pdfextract.pipeline import ExtractionResult

FORMATS = ("xml", "text")


def render(result: "ExtractionResult", to: str = "xml", explicit_only: bool = True) -> str:
    """Render ``result`` in one of ``FORMATS``."""
    if to == "xml":
        return render_xml(result, explicit_only=explicit_only)
    if to == "text":
        return render_text(result, explicit_only=explicit_only)
    raise ValueError(f"Unknown output format {to!r}; expected one of {', '.join(FORMATS)}")


__all__ = [
    "FORMATS",
    "render",
    "render_xml",
    "render_text",
    "XMLRenderer",
    "XMLRenderConfig",
]
