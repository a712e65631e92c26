class DataApiError(RuntimeError):
    """Base class for Data API client errors."""


class DataApiValidationError(DataApiError):
    """A required operation argument was missing or invalid.  No request was sent."""


class DataApiTransportError(DataApiError):
    """The HTTP request failed: network error, timeout, or non-success status."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DataApiDecodeError(DataApiError):
    """The response body was not a JSON object."""
