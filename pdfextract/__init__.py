"""
pdfextract: layered spatial models of PDF pages.

Spatial types (text runs, margins, rows, columns, regions, sections,
references) are declared with the types they depend on. A pipeline run
resolves their order, lets each builder listen for low-level document
events, streams the document once and returns every type's objects.

Example:
    >>> from pdfextract import extract
    >>> result = extract("paper.pdf", ["text_runs", "references"])
    >>> for run in result.each("text_runs"):
    ...     run.alter({"height": {"grow_by_percent": 1}})
"""

__version__ = "0.1.0"

from pdfextract.errors import (
    ConfigurationError,
    CyclicDependencyError,
    MalformedSegmentationInputError,
    PdfExtractError,
    TypeMismatchError,
    UnknownDependencyError,
    UnknownEventError,
    UnknownOperationError,
    UnknownSpatialTypeError,
)
from pdfextract.graph import TypeRegistry
from pdfextract.models import Operation, SpatialLayer, SpatialObject, SpatialType
from pdfextract.pipeline import ExtractionResult, SpatialPipeline, convert, extract
from pdfextract.spatials import default_registry, split_refs

__all__ = [
    "SpatialObject",
    "SpatialType",
    "SpatialLayer",
    "Operation",
    "TypeRegistry",
    "SpatialPipeline",
    "ExtractionResult",
    "default_registry",
    "extract",
    "convert",
    "split_refs",
    "PdfExtractError",
    "ConfigurationError",
    "UnknownSpatialTypeError",
    "UnknownDependencyError",
    "CyclicDependencyError",
    "UnknownEventError",
    "UnknownOperationError",
    "TypeMismatchError",
    "MalformedSegmentationInputError",
]
