"""
Shared fixtures: a synthetic one-page paper expressed as document events.

Page 0 is 600x800 points and holds, top to bottom:
- a heading (y 60-74)
- two lines of prose (y 100-124)
- three numbered references (y 300-336)
"""

import pytest

from pdfextract.ingest import PDF_EVENTS, EventStream


def text_event(page, text, x0, y0, x1, y1, font="Helvetica", size=11.0):
    return ("show_text_with_positioning", (page, text, x0, y0, x1, y1, font, size))


REFERENCE_LINES = [
    "[1] Smith J. Data 12(3) 2001.",
    "[2] Wong K. Maps 45(6) 2003.",
    "[3] Chen L. Text 78(9) 2005.",
]


@pytest.fixture
def paper_events():
    events = [
        ("begin_page", (0, 600.0, 800.0)),
        text_event(0, "Introduction", 72, 60, 180, 74, size=14.0),
        text_event(0, "This is the body of the paper.", 72, 100, 400, 112),
        text_event(0, "It has two lines of prose text.", 72, 112, 390, 124),
        ("draw_image", (0, 420, 100, 560, 200)),
    ]
    for i, line in enumerate(REFERENCE_LINES):
        top = 300 + 12 * i
        events.append(text_event(0, line, 72, top, 255 + i, top + 12, size=10.0))
    events.append(("end_page", (0,)))
    return events


@pytest.fixture
def paper_stream(paper_events):
    return EventStream(paper_events, PDF_EVENTS)
