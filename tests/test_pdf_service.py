"""Tests for PDF service."""

import io

import pytest

from app.pdf2word.exceptions import ConversionError
from app.pdf2word.services.pdf_service import PDFExtractionError, PDFService


class TestPDFService:
    """Tests for PDFService class."""

    def test_init_default_values(self):
        """Test PDFService initializes with default values."""
        service = PDFService()
        assert service.page_separator == "\n"

    def test_extract_text(self, sample_pdf_bytes: bytes):
        """Test extracting text from a simple PDF."""
        service = PDFService()
        assert service.extract_text(sample_pdf_bytes).strip() == "Hello World"

    def test_extract_text_from_file_object(self, sample_pdf_bytes: bytes):
        """Test that file-like objects are accepted."""
        service = PDFService()
        assert "Hello World" in service.extract_text(io.BytesIO(sample_pdf_bytes))

    def test_extract_text_multiple_pages(self, make_pdf):
        """Test that every page contributes in order."""
        service = PDFService()
        text = service.extract_text(make_pdf("First page", "Second page"))
        assert text.index("First page") < text.index("Second page")

    def test_convert_empty_file_raises_error(self):
        """Test that empty file raises PDFExtractionError."""
        service = PDFService()
        with pytest.raises(PDFExtractionError) as exc_info:
            service.extract_text(b"")
        assert "Empty" in str(exc_info.value)

    def test_convert_invalid_pdf_raises_error(self, invalid_file_bytes: bytes):
        """Test that non-PDF content raises PDFExtractionError."""
        service = PDFService()
        with pytest.raises(PDFExtractionError) as exc_info:
            service.extract_text(invalid_file_bytes)
        assert "Invalid PDF" in str(exc_info.value) or "does not start" in str(
            exc_info.value
        )

    def test_corrupted_pdf_raises_conversion_error(self, corrupted_pdf_bytes: bytes):
        """Test that a corrupt PDF surfaces as a ConversionError."""
        service = PDFService()
        with pytest.raises(ConversionError):
            service.extract_text(corrupted_pdf_bytes)
