"""
Word document generation using python-docx.

Renders extracted text into a minimal single-section document: one
paragraph holding the whole text as one run with a fixed font. Layout,
images and tables of the source PDF are not reproduced.
"""

import io
import logging
import re

from docx import Document
from docx.oxml.ns import qn
from docx.shared import Pt

from ..exceptions import ConversionError

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

# XML 1.0 forbids these; lxml refuses them when building the run.
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


class DocumentGenerationError(ConversionError):
    """Raised when the Word document cannot be produced."""

    pass


class DocxService:
    """Service that turns plain text into a .docx payload."""

    def __init__(self, font_name: str = "Arial", font_size: float = 12):
        """
        Initialize the document service.

        Args:
            font_name: Font family applied to the text run.
            font_size: Font size in points.
        """
        self.font_name = font_name
        self.font_size = font_size

    @staticmethod
    def sanitize_text(text: str) -> str:
        """Strip characters that cannot be stored in document XML."""
        return _ILLEGAL_XML_CHARS.sub("", text)

    def build_document(self, text: str):
        """
        Build the python-docx Document for ``text``.

        Returns:
            docx.document.Document with one paragraph and one run.
        """
        document = Document()
        paragraph = document.add_paragraph()
        run = paragraph.add_run(self.sanitize_text(text))
        run.font.name = self.font_name
        run.font.size = Pt(self.font_size)

        # Apply the family to East Asian text as well
        r_pr = run._element.get_or_add_rPr()
        r_fonts = r_pr.get_or_add_rFonts()
        r_fonts.set(qn("w:eastAsia"), self.font_name)
        return document

    def render(self, text: str) -> bytes:
        """
        Render ``text`` into .docx bytes.

        Raises:
            DocumentGenerationError: If python-docx fails to build or save.
        """
        try:
            document = self.build_document(text)
            buffer = io.BytesIO()
            document.save(buffer)
        except Exception as e:
            logger.exception("Document generation failed")
            raise DocumentGenerationError(f"Document generation failed: {e}") from e

        payload = buffer.getvalue()
        logger.info("Rendered document (%d chars, %d bytes)", len(text), len(payload))
        return payload
