"""
PDF to Word Backend Application.

A FastAPI service that accepts an uploaded PDF, extracts its text and
produces a Word document for download.
"""

__version__ = "1.0.0"
