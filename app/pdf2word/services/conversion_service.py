"""
Conversion orchestration.

Turns a staged PDF into a downloadable Word document and records the
outcome in the history log. Steps run in a fixed order:

1. read the staged PDF
2. extract its text
3. render the Word document
4. write the output atomically (temp file, then rename)
5. delete the staged input
6. record a completed entry

Any failure in steps 1-4 removes the staged input and any partial output,
records a failed entry and raises ``ConversionError``. A failure in step 5
is only logged; the conversion is still reported as successful.
"""

import asyncio
import logging
import os
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from ..exceptions import ConversionError
from ..history_store import ConversionHistory
from ..models import ConversionRecord
from .docx_service import DocxService
from .pdf_service import PDFService
from .storage import StagedUpload, UploadStorage

logger = logging.getLogger(__name__)


class ConversionService:
    """
    Orchestrates PDF to Word conversions.

    Holds no locks: every conversion works on its own uniquely named
    staged and output files, and the history store serializes appends.
    """

    def __init__(
        self,
        storage: UploadStorage,
        history: ConversionHistory,
        pdf_service: PDFService | None = None,
        docx_service: DocxService | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the conversion service.

        Args:
            storage: Staging and output directories.
            history: Store receiving one record per attempt.
            pdf_service: Text extractor. Defaults to ``PDFService()``.
            docx_service: Document renderer. Defaults to ``DocxService()``.
            timeout: Optional limit in seconds for steps 1-3.
        """
        self.storage = storage
        self.history = history
        self.pdf_service = pdf_service or PDFService()
        self.docx_service = docx_service or DocxService()
        self.timeout = timeout

    async def convert(self, staged: StagedUpload) -> ConversionRecord:
        """
        Convert a staged PDF and record the outcome.

        Args:
            staged: Upload previously written by ``UploadStorage.stage``.

        Returns:
            The completed history record.

        Raises:
            ConversionError: If any step before cleanup fails.
        """
        output_path = self.storage.output_path(staged.base_name)
        logger.info("Starting conversion of %s (%s)", staged.path.name, staged.original_name)

        try:
            if self.timeout is not None:
                payload = await asyncio.wait_for(self._render(staged), timeout=self.timeout)
            else:
                payload = await self._render(staged)
            # Outside the timed section: a timed-out render never reaches the output area
            await run_in_threadpool(self._write_output, output_path, payload)
        except Exception as e:
            if isinstance(e, asyncio.TimeoutError):
                message = f"conversion timed out after {self.timeout} seconds"
            else:
                message = str(e) or e.__class__.__name__
            logger.exception("Conversion failed for %s", staged.original_name)

            self.storage.remove_staged(staged)
            output_path.unlink(missing_ok=True)
            self.history.record(ConversionRecord.failed(staged.original_name, message))

            if isinstance(e, ConversionError):
                raise
            raise ConversionError(message) from e

        if not self.storage.remove_staged(staged):
            logger.warning("Staged input %s left behind", staged.path.name)

        record = ConversionRecord.completed(
            original_name=staged.original_name or "unknown",
            file_name=output_path.name,
        )
        self.history.record(record)
        logger.info("Conversion finished: %s", output_path.name)
        return record

    async def _render(self, staged: StagedUpload) -> bytes:
        pdf_bytes = await run_in_threadpool(staged.path.read_bytes)
        text = await run_in_threadpool(self.pdf_service.extract_text, pdf_bytes)
        return await run_in_threadpool(self.docx_service.render, text)

    @staticmethod
    def _write_output(output_path: Path, payload: bytes) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        partial = output_path.with_name(output_path.name + ".part")
        try:
            partial.write_bytes(payload)
            os.replace(partial, output_path)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
