"""
FastAPI application for the PDF to Word conversion service.

Provides endpoints for:
- Converting an uploaded PDF into a Word document
- Listing recent conversion attempts
- Downloading generated documents
- Health checks

The module-level ``app`` is the ASGI export used by hosting platforms;
``run()`` serves the same application directly over TCP.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings
from .exceptions import InternalError, ServiceError, ValidationError, status_code_for
from .history_store import ConversionHistory
from .middleware import SECURITY_HEADERS, SecurityHeadersMiddleware, UploadSizeLimitMiddleware
from .models import HealthResponse
from .routers import convert, downloads, history
from .services.conversion_service import ConversionService
from .services.docx_service import DocxService
from .services.pdf_service import PDFService
from .services.storage import UploadStorage

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF to Word service...")
    app.state.storage.ensure_directories()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down PDF to Word service...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Every piece of shared state (history, storage, services) is created
    here and attached to ``app.state``; routes reach it through
    dependencies.

    Args:
        settings: Configuration to use. Defaults to ``get_settings()``.

    Returns:
        Configured application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="PDF to Word API",
        description="Convert PDF documents to Word files",
        version=__version__,
        lifespan=lifespan,
    )

    storage = UploadStorage(
        upload_dir=settings.upload_dir,
        download_dir=settings.download_dir,
        field_name=settings.upload_field_name,
        max_bytes=settings.max_upload_bytes,
    )
    conversion_history = ConversionHistory()

    app.state.settings = settings
    app.state.storage = storage
    app.state.history = conversion_history
    app.state.conversion_service = ConversionService(
        storage=storage,
        history=conversion_history,
        pdf_service=PDFService(),
        docx_service=DocxService(
            font_name=settings.docx_font_name,
            font_size=settings.docx_font_size,
        ),
        timeout=settings.conversion_timeout,
    )

    # Middleware added last runs first
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(
        UploadSizeLimitMiddleware,
        path=convert.CONVERT_PATH,
        max_bytes=settings.max_upload_bytes,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health Endpoints
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse()

    # =========================================================================
    # Include Routers
    # =========================================================================

    app.include_router(convert.router)
    app.include_router(history.router)
    app.include_router(downloads.router)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Render any service error through the status code table."""
        return JSONResponse(status_code=status_code_for(exc), content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle malformed requests the framework could not parse."""
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return await service_error_handler(request, ValidationError(message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle framework HTTP errors (unknown routes, bad methods)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Catch-all for anything unexpected."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = f"{exc.__class__.__name__}: {exc}" if settings.debug else None
        error = InternalError(message)
        # Runs outside the middleware stack, so headers are applied here
        return JSONResponse(
            status_code=status_code_for(error),
            content=error.to_payload(),
            headers=SECURITY_HEADERS,
        )

    return app


configure_logging(get_settings().log_level)

app = create_app()


def run() -> None:
    """
    Serve the application with uvicorn.

    On the hosting platform (``VERCEL`` set) the platform imports ``app``
    itself, so nothing is started here.
    """
    settings = get_settings()
    if settings.vercel:
        logger.info("VERCEL is set; exporting the ASGI app without listening")
        return

    import uvicorn

    logger.info("PDF to Word server listening on port %d", settings.port)
    logger.info("API available at http://localhost:%d/api", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
