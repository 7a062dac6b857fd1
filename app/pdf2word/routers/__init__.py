"""
Routers package for FastAPI endpoints.

Organized by domain:
- convert: PDF upload and conversion
- downloads: Generated document downloads
- history: Recent conversion attempts
"""

from . import convert, downloads, history

__all__ = ["convert", "downloads", "history"]
