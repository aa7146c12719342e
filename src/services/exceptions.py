"""Shared exceptions for service layer operations."""


class ApiError(Exception):
    """
    Base class for errors reported to the client.

    Carries the HTTP status code and the message placed in the response body.
    The handlers in api.main decide the body shape.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkValidationError(ApiError):
    """Raised when a new bookmark fails a create rule. Reported as plain text."""

    status_code = 400


class BadRequestError(ApiError):
    """Raised when a request is missing its id or carries no updatable field."""

    status_code = 400


class BookmarkNotFoundError(ApiError):
    """Raised when no bookmark exists for the requested id."""

    status_code = 404

    def __init__(self, bookmark_id: int | str | None = None) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark Not Found")
