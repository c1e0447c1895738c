"""Request logging and security header middleware."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger("api.access")

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add default security headers to every response without overriding route-set ones."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Write one access-log line per request.

    ``tiny`` format (production): ``GET /api/bookmarks 200 - 3.1 ms``.
    ``common`` format: prefixed with the client address and suffixed with the
    response size.
    """

    def __init__(self, app: ASGIApp, log_format: str = "common") -> None:
        super().__init__(app)
        self.log_format = log_format

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is rendered further out, so its size is unknown here
            self._log(request, 500, "-", start)
            raise
        self._log(
            request, response.status_code,
            response.headers.get("content-length", "-"), start,
        )
        return response

    def _log(self, request: Request, status_code: int, length: str, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if self.log_format == "tiny":
            logger.info(
                "%s %s %s - %.1f ms",
                request.method, request.url.path, status_code, elapsed_ms,
            )
        else:
            client = request.client.host if request.client else "-"
            logger.info(
                '%s "%s %s HTTP/%s" %s %s - %.1f ms',
                client,
                request.method,
                request.url.path,
                request.scope.get("http_version", "1.1"),
                status_code,
                length,
                elapsed_ms,
            )
