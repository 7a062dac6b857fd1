"""Tests for Word document generation."""

import io

import pytest
from docx import Document
from docx.oxml.ns import qn
from docx.shared import Pt

from app.pdf2word.exceptions import ConversionError
from app.pdf2word.services.docx_service import DocumentGenerationError, DocxService


def _read(payload: bytes):
    return Document(io.BytesIO(payload))


class TestDocxService:
    """Tests for DocxService class."""

    def test_init_default_values(self):
        """Test DocxService initializes with default values."""
        service = DocxService()
        assert service.font_name == "Arial"
        assert service.font_size == 12

    def test_render_produces_docx_zip(self):
        """Test rendering returns a zip-based .docx payload."""
        payload = DocxService().render("Hello World")
        assert payload[:2] == b"PK"

    def test_render_single_paragraph_single_run(self):
        """Test the document holds the text in one paragraph and one run."""
        document = _read(DocxService().render("Hello World"))
        paragraphs = [p for p in document.paragraphs if p.text]
        assert len(paragraphs) == 1
        assert paragraphs[0].text == "Hello World"
        assert len(paragraphs[0].runs) == 1
        assert len(document.sections) == 1

    def test_render_applies_font(self):
        """Test the run carries the configured font family and size."""
        document = _read(DocxService(font_name="Courier New", font_size=10).render("x"))
        run = document.paragraphs[0].runs[0]
        assert run.font.name == "Courier New"
        assert run.font.size == Pt(10)
        r_fonts = run._element.rPr.rFonts
        assert r_fonts.get(qn("w:eastAsia")) == "Courier New"

    def test_render_keeps_line_breaks(self):
        """Test multi-line text survives as one run with breaks."""
        document = _read(DocxService().render("line one\nline two"))
        assert document.paragraphs[0].text == "line one\nline two"

    def test_render_strips_control_characters(self):
        """Test characters illegal in XML are removed instead of failing."""
        document = _read(DocxService().render("a\x00b\x0cc"))
        assert document.paragraphs[0].text == "abc"

    def test_render_empty_text(self):
        """Test an empty string still yields a valid document."""
        document = _read(DocxService().render(""))
        assert document.paragraphs[0].text == ""

    def test_render_failure_raises_generation_error(self, monkeypatch):
        """Test failures are surfaced as DocumentGenerationError."""
        service = DocxService()

        def broken(text):
            raise RuntimeError("disk full")

        monkeypatch.setattr(service, "build_document", broken)
        with pytest.raises(DocumentGenerationError) as exc_info:
            service.render("x")
        assert "disk full" in str(exc_info.value)
        assert isinstance(exc_info.value, ConversionError)
