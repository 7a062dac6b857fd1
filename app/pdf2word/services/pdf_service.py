"""
PDF processing service using pypdf.

Handles extraction of plain text from PDF documents.
"""

import io
import logging
from typing import BinaryIO

from pypdf import PdfReader
from pypdf.errors import FileNotDecryptedError, PdfReadError

from ..exceptions import ConversionError

logger = logging.getLogger(__name__)


class PDFExtractionError(ConversionError):
    """Raised when text cannot be extracted from a PDF."""

    pass


class PDFService:
    """
    Service for PDF processing operations.

    Uses pypdf to read the document structure and pull the text layer out
    of every page. Scanned pages without a text layer yield no text.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: String placed between the text of consecutive pages.
        """
        self.page_separator = page_separator

    def _open(self, file_bytes: bytes | BinaryIO) -> PdfReader:
        # Ensure we have bytes
        if hasattr(file_bytes, "read"):
            pdf_bytes = file_bytes.read()
        else:
            pdf_bytes = file_bytes

        if not pdf_bytes:
            raise PDFExtractionError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise PDFExtractionError(
                "Invalid PDF file: does not start with PDF header"
            )

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
        except PdfReadError as e:
            logger.error("PDF read error: %s", e)
            raise PDFExtractionError(f"Invalid or corrupted PDF file: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error opening PDF")
            raise PDFExtractionError(f"Could not open PDF: {e}") from e

        if reader.is_encrypted:
            # Many PDFs are encrypted with an empty user password
            try:
                reader.decrypt("")
            except Exception as e:
                raise PDFExtractionError(f"Encrypted PDF is not supported: {e}") from e

        return reader

    def extract_text(self, file_bytes: bytes | BinaryIO) -> str:
        """
        Extract plain text from all pages of a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            Text of every page joined with the page separator.

        Raises:
            PDFExtractionError: If the PDF cannot be parsed for any reason.
        """
        reader = self._open(file_bytes)

        try:
            pages = [page.extract_text() or "" for page in reader.pages]
        except FileNotDecryptedError as e:
            raise PDFExtractionError(f"Encrypted PDF is not supported: {e}") from e
        except PdfReadError as e:
            logger.error("PDF syntax error: %s", e)
            raise PDFExtractionError(f"Invalid or corrupted PDF file: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error during text extraction")
            raise PDFExtractionError(f"Text extraction failed: {e}") from e

        logger.info("Extracted text from %d page(s)", len(pages))
        return self.page_separator.join(pages)
