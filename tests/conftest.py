"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.pdf2word.config import Settings
from app.pdf2word.main import create_app


def _escape_pdf_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(*pages: str) -> bytes:
    """
    Build a small valid PDF with one line of Helvetica text per page.

    Byte offsets in the cross-reference table are computed so strict
    readers accept the file.
    """
    page_count = len(pages) or 1
    texts = list(pages) or [""]
    font_id = 3
    first_page_id = 4
    objects: list[bytes] = []

    kids = " ".join(f"{first_page_id + 2 * i} 0 R" for i in range(page_count))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    for i, text in enumerate(texts):
        page_id = first_page_id + 2 * i
        content = f"BT /F1 24 Tf 72 720 Td ({_escape_pdf_string(text)}) Tj ET".encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> "
                f"/Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Factory building PDFs whose pages contain the given text."""
    return build_pdf


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A one-page PDF whose extracted text is "Hello World"."""
    return build_pdf("Hello World")


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def corrupted_pdf_bytes() -> bytes:
    """Bytes with a PDF header that no parser can make sense of."""
    return b"%PDF-1.4\nthis file was truncated"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated to a temporary directory."""
    return Settings(
        _env_file=None,
        upload_dir=tmp_path / "uploads",
        download_dir=tmp_path / "downloads",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Create a fresh application per test."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
