"""
XML rendering of extraction results.

Layout::

    <pdf>
      <text-runs>
        <text-run page="0" x="72" y="60.2" width="118.4" height="13.8" font="Helvetica" size="11">Abstract</text-run>
        ...
      </text-runs>
      <references>
        <reference order="1">A. Author. A title. 2001.</reference>
      </references>
    </pdf>

One container element per spatial type, one child element per object; tags
come from ``spatial_name_to_tag_name``, with characters XML names cannot
carry replaced by ``_``. The ``content`` attribute becomes the
element text, every other attribute an XML attribute.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from lxml import etree

from pdfextract.utils import spatial_name_to_tag_name

if TYPE_CHECKING:
    from pdfextract.pipeline import ExtractionResult

# Characters XML 1.0 cannot carry; PDFs produce them in broken text layers.
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def _xml_text(value: str) -> str:
    return _INVALID_XML_CHARS.sub("", value)


def _xml_name(name: str) -> str:
    name = _INVALID_NAME_CHARS.sub("_", name)
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = "_" + name
    return name


def _format_value(value: Any, precision: int) -> str:
    if isinstance(value, float):
        return f"{round(value, precision):g}"
    return _xml_text(str(value))


@dataclass
class XMLRenderConfig:
    """Configuration for XML rendering."""
    root_tag: str = "pdf"
    explicit_only: bool = True
    precision: int = 3
    pretty_print: bool = True


class XMLRenderer:
    """Render an ExtractionResult as an XML document."""

    def __init__(self, config: Optional[XMLRenderConfig] = None):
        self.config = config or XMLRenderConfig()

    def build(self, result: "ExtractionResult") -> etree._Element:
        root = etree.Element(self.config.root_tag)
        for name, layer in result.layers.items():
            if self.config.explicit_only and not layer.explicit:
                continue
            container = etree.SubElement(root, _xml_name(spatial_name_to_tag_name(name)))
            child_tag = _xml_name(spatial_name_to_tag_name(name, singular=True))
            for obj in layer.objects:
                element = etree.SubElement(container, child_tag)
                for key, value in obj.items():
                    if value is None:
                        continue
                    if key == "content":
                        element.text = _xml_text(str(value))
                    else:
                        element.set(_xml_name(key), _format_value(value, self.config.precision))
        return root

    def render(self, result: "ExtractionResult") -> str:
        return etree.tostring(
            self.build(result),
            pretty_print=self.config.pretty_print,
            xml_declaration=True,
            encoding="UTF-8",
        ).decode("utf-8")


def render_xml(result: "ExtractionResult", explicit_only: bool = True) -> str:
    return XMLRenderer(XMLRenderConfig(explicit_only=explicit_only)).render(result)
