"""
Services package for the PDF to Word application.

Contains:
- storage: Staging and output directories
- pdf_service: PDF text extraction
- docx_service: Word document generation
- conversion_service: Orchestration of a single conversion
"""

from .conversion_service import ConversionService
from .docx_service import DocxService
from .pdf_service import PDFService
from .storage import UploadStorage

__all__ = ["ConversionService", "DocxService", "PDFService", "UploadStorage"]
