"""Unit tests for the Word document exporter."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from apa_table.engine.pipeline import generate_table
from apa_table.engine.schema import StyleSpec
from apa_table.errors import ExportPreconditionError
from apa_table.export.document import border_rules, build_word_document, export_word


class TestBorderRules:

    def test_heavy_and_thin(self):
        assert border_rules("#ff0000") == ("2pt solid #ff0000", "1pt solid #ff0000")


class TestBuildWordDocument:

    def test_shell_namespaces_and_charset(self):
        doc = build_word_document('<table class="apa-table"></table>', "#000000", "#000000")
        assert "xmlns:o='urn:schemas-microsoft-com:office:office'" in doc
        assert "xmlns:w='urn:schemas-microsoft-com:office:word'" in doc
        assert "<meta charset='utf-8'>" in doc

    def test_border_colour_substituted(self):
        doc = build_word_document('<table class="apa-table"></table>', "#00ff00", "#111111")
        assert "border-top: 2pt solid #00ff00; border-bottom: 1pt solid #00ff00;" in doc
        assert ".apa-table tbody tr:last-child { border-bottom: 2pt solid #00ff00; }" in doc
        assert ".apa-caption { color: #111111; }" in doc

    def test_markup_embedded(self):
        markup = '<table class="apa-table"><tr><td>x</td></tr></table>'
        assert markup in build_word_document(markup, "#000000", "#000000")

    def test_missing_table_raises(self):
        with pytest.raises(ExportPreconditionError):
            build_word_document("<p>No data found.</p>", "#000000", "#000000")


class TestExportWord:

    def test_nothing_rendered_raises(self):
        with pytest.raises(ExportPreconditionError):
            export_word(None)

    def test_placeholder_raises(self):
        with pytest.raises(ExportPreconditionError):
            export_word(generate_table("\n\n", ","))

    def test_filename_and_bytes(self):
        style = StyleSpec(border_color="#336699")
        rendered = generate_table("Name,Score\nAlice,90", ",", caption="Table 1. Scores", style=style)
        filename, payload = export_word(rendered)
        assert filename == "APA_Table.doc"
        text = payload.decode("utf-8")
        assert rendered.markup in text
        assert "2pt solid #336699" in text
