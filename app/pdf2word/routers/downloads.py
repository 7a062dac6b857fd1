"""
Router for downloading generated documents.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from ..services.docx_service import DOCX_MEDIA_TYPE
from ..services.storage import UploadStorage
from .convert import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/downloads", tags=["downloads"])


@router.get("/{filename}")
async def download_document(
    filename: str,
    storage: UploadStorage = Depends(get_storage),
) -> FileResponse:
    """
    Retrieve a generated Word document as an attachment.

    Args:
        filename: Name returned by the convert endpoint.

    Returns:
        The file with a Content-Disposition suggesting its name.
    """
    path = storage.resolve_download(filename)
    logger.info("Serving download %s", path.name)
    return FileResponse(path, media_type=DOCX_MEDIA_TYPE, filename=path.name)
