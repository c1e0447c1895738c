"""Client-facing errors raised by the bookmark endpoints."""

REQUIRED_FIELDS_MESSAGE = "title, url, and rating are required"
RATING_RANGE_MESSAGE = "rating must be a number 1-5"
EMPTY_PATCH_MESSAGE = "Must contain either title, url, description, or rating"
EMPTY_TEXT_MESSAGE = "title and url must not be empty"
INVALID_BODY_MESSAGE = "Request body is invalid"
NOT_FOUND_MESSAGE = "Bookmark does not exist"


class BookmarkApiError(Exception):
    """
    Base class for errors that are answered with ``{"error": {"message": ...}}``.

    These are expected outcomes (bad input, unknown id) and are rendered by
    their own exception handler, never by the catch-all 500 handler.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict:
        """Convert to the JSON error envelope."""
        return {"error": {"message": self.message}}


class BookmarkValidationError(BookmarkApiError):
    """Request body failed a required-field or range check."""

    status_code = 400


class BookmarkNotFoundError(BookmarkApiError):
    """No bookmark matches the requested id."""

    status_code = 404

    def __init__(self, message: str = NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)
