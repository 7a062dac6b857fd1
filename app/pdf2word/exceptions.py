"""
Error taxonomy for the conversion service.

Every failure a request can hit is one of a small closed set of
exceptions. Each one knows how to render itself as JSON; the HTTP status
code is looked up in ``ERROR_STATUS_CODES`` by the single exception
handler registered in ``main.py``.
"""

from typing import Any

from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    error = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.error
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        """JSON body sent to the client."""
        return {"error": self.error, "message": self.message}


class ValidationError(ServiceError):
    """Raised when the uploaded input is missing or unacceptable."""

    error = "invalid request"

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class PayloadTooLarge(ValidationError):
    """Raised when an upload exceeds the size ceiling."""

    error = "file too large"


class ConversionError(ServiceError):
    """Raised when text extraction or document generation fails."""

    error = "conversion failed"

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": self.error, "message": self.message}


class NotFoundError(ServiceError):
    """Raised when a requested download does not exist."""

    error = "file not found"

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.error}


class InternalError(ServiceError):
    """Anything unexpected, caught by the top-level handler."""

    pass


# Resolved along the exception MRO, so subclasses inherit their parent code.
ERROR_STATUS_CODES: dict[type[ServiceError], int] = {
    PayloadTooLarge: status.HTTP_413_CONTENT_TOO_LARGE,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConversionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ServiceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: ServiceError) -> int:
    """Resolve the HTTP status code for a service error."""
    for klass in type(exc).__mro__:
        if klass in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
