"""
HTTP middleware for the application.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from .exceptions import PayloadTooLarge, status_code_for

# Baseline hardening headers, matching what helmet sets by default
SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self'; base-uri 'self'; frame-ancestors 'self'; "
        "object-src 'none'; img-src 'self' data:; form-action 'self'"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}

# Allowance for multipart boundaries and part headers on top of the file
MULTIPART_OVERHEAD = 64 * 1024


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers to every response.

    Headers already set by a route are left untouched.
    """

    def __init__(self, app, headers: dict[str, str] | None = None):
        super().__init__(app)
        self.headers = SECURITY_HEADERS if headers is None else headers

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


class UploadSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects uploads whose declared Content-Length cannot fit the ceiling.

    Runs before the multipart body is parsed. Bodies without a declared
    length are still capped while being staged.
    """

    def __init__(self, app, path: str, max_bytes: int):
        super().__init__(app)
        self.path = path
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST" and request.url.path == self.path:
            content_length = request.headers.get("content-length", "")
            if content_length.isdigit() and int(content_length) > self.max_bytes + MULTIPART_OVERHEAD:
                exc = PayloadTooLarge(f"file exceeds the {self.max_bytes} byte limit")
                return JSONResponse(status_code=status_code_for(exc), content=exc.to_payload())
        return await call_next(request)
