"""
Ingestion module: document event sources.

This module provides:
- EventSource protocol consumed by the pipeline
- EventStream, an in-memory source (tests, replaying recorded events)
- PDFEventSource, a PyMuPDF-backed source emitting page and text events
"""

from pdfextract.ingest.events import EventCallback, EventSource, EventStream
from pdfextract.ingest.pdf import PDF_EVENTS, PDFEventSource

__all__ = [
    "EventSource",
    "EventCallback",
    "EventStream",
    "PDFEventSource",
    "PDF_EVENTS",
]
