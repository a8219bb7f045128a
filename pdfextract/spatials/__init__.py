"""
Built-in spatial types.

Types and their dependencies::

    pages, text_runs          <- document events
    h_margins, v_margins      <- pages, text_runs
    rows                      <- pages, h_margins
    columns                   <- pages, v_margins, rows
    regions                   <- text_runs
    sections                  <- regions, columns
    references                <- sections

``default_registry()`` returns a fresh registry holding all of them; add
custom types on top of it with ``registry.register`` or ``registry.spatial``.
"""

from pdfextract.graph import TypeRegistry
from pdfextract.spatials import margins, references, regions, text
from pdfextract.spatials.references import (
    infer_delimiters,
    is_reference_bearing,
    letter_ratio,
    split_refs,
)

BUILTIN_TYPES = (
    "pages",
    "text_runs",
    "h_margins",
    "v_margins",
    "rows",
    "columns",
    "regions",
    "sections",
    "references",
)


def default_registry() -> TypeRegistry:
    registry = TypeRegistry()
    text.include_in(registry)
    margins.include_in(registry)
    regions.include_in(registry)
    references.include_in(registry)
    return registry


__all__ = [
    "BUILTIN_TYPES",
    "default_registry",
    "split_refs",
    "infer_delimiters",
    "letter_ratio",
    "is_reference_bearing",
]
