"""Exception handlers mapping errors to ``{"error": {"message": ...}}`` responses."""
import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.middleware import SECURITY_HEADERS
from core.config import Settings
from core.errors import (
    INVALID_BODY_MESSAGE,
    RATING_RANGE_MESSAGE,
    BookmarkApiError,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register the API error handlers on ``app``."""

    @app.exception_handler(BookmarkApiError)
    async def bookmark_api_error_handler(
        request: Request, exc: BookmarkApiError,
    ) -> JSONResponse:
        """Expected client errors: validation failures and unknown ids."""
        logger.info(
            "%s %s -> %s: %s",
            request.method, request.url.path, exc.status_code, exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError,
    ) -> JSONResponse:
        """Bodies that could not be parsed into the request schema."""
        logger.warning(
            "Invalid request body on %s: %s", request.url.path, exc.errors(),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": {"message": validation_error_message(exc.errors())}},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for store failures and bugs; hides details in production."""
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method, request.url.path, exc,
            exc_info=exc,
        )
        message = SERVER_ERROR_MESSAGE if settings.is_production else str(exc)
        # Rendered outside the middleware stack, so headers are set here
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"message": message}},
            headers=SECURITY_HEADERS,
        )


def validation_error_message(errors: Sequence[Any]) -> str:
    """Pick the client message for a list of pydantic errors."""
    for error in errors:
        if "rating" in error.get("loc", ()):
            return RATING_RANGE_MESSAGE
    return INVALID_BODY_MESSAGE
