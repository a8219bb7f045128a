"""
Tests for the command-line interface.
"""

import pytest
from typer.testing import CliRunner

from pdfextract import __version__
from pdfextract.cli import app

runner = CliRunner()


@pytest.fixture
def references_pdf(tmp_path):
    fitz = pytest.importorskip("fitz")
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "References", fontsize=14, fontname="helv")
    for i, line in enumerate([
        "[1] Smith J. Data 12(3) 2001.",
        "[2] Wong K. Maps 45(6) 2003.",
        "[3] Chen L. Text 78(9) 2005.",
    ]):
        page.insert_text((72, 200 + 14 * i), line, fontsize=10, fontname="helv")
    path = tmp_path / "refs.pdf"
    doc.save(str(path))
    doc.close()
    return path


class TestInfoCommands:

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_types(self):
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        for name in ("text_runs", "h_margins", "sections", "references"):
            assert name in result.output

    def test_order(self):
        result = runner.invoke(app, ["order", "regions"])
        assert result.exit_code == 0
        lines = [line.strip() for line in result.output.splitlines() if line.strip()]
        assert lines == ["1.   text_runs", "2. * regions"]

    def test_order_unknown_type(self):
        result = runner.invoke(app, ["order", "images"])
        assert result.exit_code == 1
        assert "images" in result.output


class TestConvert:

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "missing.pdf")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unknown_format(self, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "x.pdf"), "--to", "html"])
        assert result.exit_code == 1

    def test_unknown_type(self, references_pdf):
        result = runner.invoke(app, ["convert", str(references_pdf), "-t", "images"])
        assert result.exit_code == 1
        assert "images" in result.output

    def test_text_to_stdout(self, references_pdf):
        result = runner.invoke(
            app, ["convert", str(references_pdf), "-t", "references", "--to", "text"],
        )
        assert result.exit_code == 0
        assert "== references (3) ==" in result.output
        assert "[3] Chen L. Text 78(9) 2005." in result.output

    def test_xml_to_file(self, references_pdf, tmp_path):
        out = tmp_path / "refs.xml"
        result = runner.invoke(
            app, ["convert", str(references_pdf), "-t", "references", "-o", str(out)],
        )
        assert result.exit_code == 0
        xml = out.read_text(encoding="utf-8")
        assert "<references>" in xml
        assert "Wong K. Maps 45(6) 2003." in xml


class TestReferencesCommand:

    def test_lists_references(self, references_pdf):
        result = runner.invoke(app, ["references", str(references_pdf)])
        assert result.exit_code == 0
        assert "References (3)" in result.output
        assert "Smith J. Data 12(3) 2001." in result.output

    def test_drop_trailing(self, references_pdf):
        result = runner.invoke(app, ["references", str(references_pdf), "--drop-trailing"])
        assert result.exit_code == 0
        assert "References (2)" in result.output
        assert "Chen L." not in result.output

    def test_pages_without_references(self, references_pdf):
        result = runner.invoke(app, ["references", str(references_pdf), "-p", "2"])
        assert result.exit_code == 0
        assert "No numbered references found." in result.output
