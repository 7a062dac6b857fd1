"""
Router for the conversion endpoint.

Handles:
- PDF upload, validation and staging
- Conversion to a Word document
"""

import logging

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile as StarletteUploadFile

from ..exceptions import ValidationError
from ..models import ConvertResponse
from ..services.conversion_service import ConversionService
from ..services.storage import UploadStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["convert"])

CONVERT_PATH = "/api/convert"


def get_storage(request: Request) -> UploadStorage:
    """Dependency that provides the application's upload storage."""
    return request.app.state.storage


def get_conversion_service(request: Request) -> ConversionService:
    """Dependency that provides the application's conversion service."""
    return request.app.state.conversion_service


@router.post("/convert", response_model=ConvertResponse, response_model_by_alias=True)
async def convert_pdf(
    request: Request,
    storage: UploadStorage = Depends(get_storage),
    service: ConversionService = Depends(get_conversion_service),
) -> ConvertResponse:
    """
    Convert an uploaded PDF to a Word document.

    Accepts one PDF in the ``pdf`` form field, extracts its text and
    writes a .docx to the output area. The response carries the URL the
    document can be downloaded from. A ``pdf`` field holding plain text
    counts as no file at all.
    """
    form = await request.form()
    pdf = form.get(storage.field_name)
    if not isinstance(pdf, StarletteUploadFile):
        raise ValidationError("no file uploaded")

    staged = await storage.stage(pdf)
    record = await service.convert(staged)

    return ConvertResponse(
        message="conversion succeeded",
        download_url=record.download_url,
        file_name=record.file_name,
    )
