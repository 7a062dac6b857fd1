"""
Pydantic models for the PDF to Word conversion service.

Defines the conversion history record and the JSON response bodies
returned by the API.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversionStatus(str, Enum):
    """Outcome of a conversion attempt."""

    COMPLETED = "completed"
    FAILED = "failed"


class ConversionRecord(BaseModel):
    """
    One attempted conversion, as kept in the history log.

    Records are immutable. ``file_name`` and ``download_url`` are present
    only for completed conversions, ``error`` only for failed ones.

    Attributes:
        id: Unique identifier within the process lifetime.
        original_name: Client-supplied file name (display only).
        status: completed or failed.
        file_name: Generated output file name.
        download_url: Relative path the output can be fetched from.
        error: Human-readable failure message.
        created_at: When the record was created.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    original_name: str = Field(..., description="Client-supplied file name")
    status: ConversionStatus
    file_name: str | None = Field(default=None, description="Generated .docx name")
    download_url: str | None = Field(default=None, description="Download path")
    error: str | None = Field(default=None, description="Failure message")
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def check_outcome_fields(self) -> "ConversionRecord":
        """Ensure outcome-specific fields match the status."""
        if self.status == ConversionStatus.COMPLETED:
            if not self.file_name or not self.download_url:
                raise ValueError("completed records need file_name and download_url")
            if self.error is not None:
                raise ValueError("completed records cannot carry an error")
        else:
            if self.file_name is not None or self.download_url is not None:
                raise ValueError("failed records cannot reference an output file")
            if not self.error:
                raise ValueError("failed records need an error message")
        return self

    @classmethod
    def completed(cls, original_name: str, file_name: str) -> "ConversionRecord":
        """Build a record for a successful conversion."""
        return cls(
            original_name=original_name,
            status=ConversionStatus.COMPLETED,
            file_name=file_name,
            download_url=f"/downloads/{file_name}",
        )

    @classmethod
    def failed(cls, original_name: str | None, error: str) -> "ConversionRecord":
        """Build a record for a failed conversion."""
        return cls(
            original_name=original_name or "unknown",
            status=ConversionStatus.FAILED,
            error=error or "unknown error",
        )

    def to_json(self) -> dict:
        """Serialize with camelCase keys, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConvertResponse(BaseModel):
    """Response model for a successful conversion."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = Field(default=True)
    message: str = Field(..., description="Status message")
    download_url: str = Field(..., description="Relative download path")
    file_name: str = Field(..., description="Generated .docx name")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")
    timestamp: str = Field(default_factory=lambda: _utcnow().isoformat())
