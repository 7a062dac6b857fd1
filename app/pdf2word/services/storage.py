"""
Filesystem storage for staged uploads and generated documents.

Two directories are managed:
- the staging area, holding uploaded PDFs until they are converted
- the output area, holding generated .docx files for download
"""

import logging
import os
import random
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from ..exceptions import NotFoundError, PayloadTooLarge, ValidationError

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StagedUpload:
    """A PDF written to the staging area, owned by one conversion."""

    path: Path
    original_name: str | None
    size: int

    @property
    def base_name(self) -> str:
        """Staged file name without the .pdf suffix."""
        return self.path.name.removesuffix(".pdf")


def is_pdf_media_type(content_type: str | None) -> bool:
    """Check a Content-Type value, ignoring parameters and case."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == PDF_MEDIA_TYPE


class UploadStorage:
    """
    Manages the staging and output directories.

    Staged names combine the field name, a millisecond timestamp and a
    random number, so concurrent uploads never collide.
    """

    def __init__(
        self,
        upload_dir: Path,
        download_dir: Path,
        field_name: str = "pdf",
        max_bytes: int = 10 * 1024 * 1024,
    ):
        self.upload_dir = Path(upload_dir)
        self.download_dir = Path(download_dir)
        self.field_name = field_name
        self.max_bytes = max_bytes

    def ensure_directories(self) -> None:
        """Create the staging and output areas if they are missing."""
        for directory in (self.upload_dir, self.download_dir):
            if not directory.exists():
                logger.info("Creating directory %s", directory)
            directory.mkdir(parents=True, exist_ok=True)

    def staged_name(self) -> str:
        """Generate a unique staging file name."""
        timestamp = int(time.time() * 1000)
        suffix = random.randint(0, 10**9)
        return f"{self.field_name}-{timestamp}-{suffix}.pdf"

    async def stage(self, upload: UploadFile) -> StagedUpload:
        """
        Validate an upload and write it to the staging area.

        The media type is checked before anything touches the disk. The
        body is copied in chunks and abandoned as soon as it exceeds the
        ceiling.

        Args:
            upload: Multipart file from the request.

        Returns:
            The staged file.

        Raises:
            ValidationError: If the upload is not a PDF.
            PayloadTooLarge: If the upload exceeds ``max_bytes``.
        """
        if not is_pdf_media_type(upload.content_type):
            logger.info(
                "Rejected upload %s with media type %s",
                upload.filename,
                upload.content_type,
            )
            raise ValidationError("unsupported file type")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / self.staged_name()
        size = 0

        try:
            with path.open("wb") as out:
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise PayloadTooLarge(
                            f"file exceeds the {self.max_bytes} byte limit"
                        )
                    out.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        finally:
            await upload.close()

        logger.info("Staged upload %s as %s (%d bytes)", upload.filename, path.name, size)
        return StagedUpload(path=path, original_name=upload.filename, size=size)

    def output_path(self, base_name: str) -> Path:
        """Path of the generated document for a staged file's base name."""
        return self.download_dir / f"{base_name}.docx"

    def remove_staged(self, staged: StagedUpload) -> bool:
        """
        Delete a staged input.

        Returns:
            True if the file is gone afterwards, False if deletion failed.
        """
        try:
            staged.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove staged file %s: %s", staged.path, e)
            return False
        return True

    def resolve_download(self, filename: str) -> Path:
        """
        Map a requested download name to a file in the output area.

        Only bare file names are accepted; anything that could address a
        path outside the output area is treated as missing.

        Raises:
            NotFoundError: If the name is unsafe or no such file exists.
        """
        if (
            not filename
            or filename != os.path.basename(filename)
            or "/" in filename
            or "\\" in filename
            or "\x00" in filename
            or filename.startswith(".")
            or not filename.endswith(".docx")
        ):
            logger.warning("Rejected download name %r", filename)
            raise NotFoundError()

        root = self.download_dir.resolve()
        path = (root / filename).resolve()
        if path.parent != root or not path.is_file():
            raise NotFoundError()
        return path
