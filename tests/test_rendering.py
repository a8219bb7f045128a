"""
Tests for XML and text rendering of extraction results.

Tests cover:
- One container per explicit spatial type, one child per object
- Attribute formatting and element text
- Rendering of dependency-only types on request
- Characters XML cannot carry
"""

import pytest
from lxml import etree

from pdfextract.config import ExtractConfig
from pdfextract.graph import TypeRegistry
from pdfextract.ingest import EventStream
from pdfextract.models import SpatialLayer, SpatialObject
from pdfextract.pipeline import ExtractionResult, SpatialPipeline
from pdfextract.render import FORMATS, XMLRenderConfig, XMLRenderer, render, render_text, render_xml


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def paper_result(paper_stream):
    return SpatialPipeline().run(["text_runs", "references"], paper_stream)


def _result(**layers):
    return ExtractionResult(
        layers={
            name: SpatialLayer(name=name, explicit=True, objects=[SpatialObject(o) for o in objects])
            for name, objects in layers.items()
        },
        order=tuple(layers),
        config=ExtractConfig(),
    )


def _parse(xml: str):
    return etree.fromstring(xml.encode("utf-8"))


def _word_builder(ctx):
    @ctx.on("word")
    def word(text):
        return {"content": text}


# ============================================================================
# XML
# ============================================================================

class TestXMLRendering:

    def test_explicit_types_only(self, paper_result):
        root = _parse(render_xml(paper_result))
        assert root.tag == "pdf"
        assert [child.tag for child in root] == ["text-runs", "references"]

    def test_all_types(self, paper_result):
        root = _parse(render_xml(paper_result, explicit_only=False))
        assert [child.tag for child in root] == [
            "pages", "text-runs", "h-margins", "v-margins", "rows",
            "columns", "regions", "sections", "references",
        ]

    def test_objects_become_elements(self, paper_result):
        root = _parse(render_xml(paper_result))
        runs = root.find("text-runs")
        assert len(runs) == 6
        first = runs[0]
        assert first.tag == "text-run"
        assert first.text == "Introduction"
        assert first.get("page") == "0"
        assert first.get("x") == "72"
        assert first.get("width") == "108"
        assert first.get("size") == "14"
        assert first.get("content") is None

    def test_references(self, paper_result):
        root = _parse(render_xml(paper_result))
        refs = root.find("references")
        assert [(r.get("order"), r.text) for r in refs] == [
            ("1", "Smith J. Data 12(3) 2001."),
            ("2", "Wong K. Maps 45(6) 2003."),
            ("3", "Chen L. Text 78(9) 2005."),
        ]

    def test_xml_declaration(self, paper_result):
        assert render_xml(paper_result).startswith("<?xml")

    def test_float_precision(self):
        result = _result(sections=[{"letter_ratio": 1 / 3, "content": "x"}])
        renderer = XMLRenderer(XMLRenderConfig(precision=2))
        section = renderer.build(result).find("sections")[0]
        assert section.get("letter_ratio") == "0.33"

    def test_invalid_characters_are_dropped(self):
        result = _result(text_runs=[{"content": "bro\x00ken\x0btext"}])
        root = _parse(render_xml(result))
        assert root.find("text-runs")[0].text == "brokentext"

    def test_attribute_names_are_sanitized(self):
        result = _result(text_runs=[{"font size": 11, "2nd": "yes", "note": None}])
        run = _parse(render_xml(result)).find("text-runs")[0]
        assert run.get("font_size") == "11"
        assert run.get("_2nd") == "yes"
        assert "note" not in run.attrib

    def test_custom_root(self):
        result = _result(pages=[{"page": 0}])
        root = XMLRenderer(XMLRenderConfig(root_tag="document")).build(result)
        assert root.tag == "document"

    def test_custom_type_names_become_valid_tags(self):
        registry = TypeRegistry()
        for name in ("2col_boxes", "ns:words", "figures.tables"):
            registry.register(name, builder=_word_builder)
        stream = EventStream([("word", ("alpha",))])
        result = SpatialPipeline(registry).run(["2col_boxes", "ns:words", "figures.tables"], stream)

        root = _parse(render_xml(result))
        assert [child.tag for child in root] == ["_2col-boxes", "ns_words", "figures.tables"]
        assert [child[0].tag for child in root] == ["_2col-boxe", "ns_word", "figures.table"]
        assert root.find("ns_words")[0].text == "alpha"

    def test_empty_layer(self):
        root = _parse(render_xml(_result(references=[])))
        assert len(root.find("references")) == 0


# ============================================================================
# Text
# ============================================================================

class TestTextRendering:

    def test_headings_and_lines(self, paper_result):
        lines = render_text(paper_result).splitlines()
        assert lines[0] == "== text_runs (6) =="
        assert lines[1] == "Introduction"
        assert "== references (3) ==" in lines
        assert "[2] Wong K. Maps 45(6) 2003." in lines

    def test_objects_without_content(self):
        text = render_text(_result(pages=[{"page": 0, "width": 600}]))
        assert text.splitlines() == ["== pages (1) ==", "page=0 width=600"]

    def test_whitespace_collapsed(self):
        text = render_text(_result(sections=[{"content": "a\nb   c"}]))
        assert "a b c" in text.splitlines()

    def test_dependency_types_hidden_by_default(self, paper_result):
        assert "== sections" not in render_text(paper_result)
        assert "== sections (3) ==" in render_text(paper_result, explicit_only=False)


class TestRenderDispatch:

    def test_formats(self, paper_result):
        assert FORMATS == ("xml", "text")
        assert render(paper_result, to="text") == render_text(paper_result)
        assert render(paper_result, to="xml") == render_xml(paper_result)

    def test_unknown_format(self, paper_result):
        with pytest.raises(ValueError):
            render(paper_result, to="html")
