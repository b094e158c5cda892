"""Custom exceptions for the application.

Every exception carries the message that is safe to show to API clients.
Anything sensitive belongs in ``details``, which is only ever logged.
"""


class GifGeneratorError(Exception):
    """Base exception for GIF generation errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GifGeneratorError):
    """A required secret or setting is missing."""

    pass


class ExternalServiceError(GifGeneratorError):
    """External API service errors."""

    def __init__(
        self,
        message: str,
        service: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.service = service
        self.upstream_status = status_code


class ValidationError(GifGeneratorError):
    """Input validation errors."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.field = field


class NoResultsError(GifGeneratorError):
    """The search produced nothing usable."""

    status_code = 404


class APIError(GifGeneratorError):
    """API endpoint errors with an explicit status code."""

    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        super().__init__(message, details)
        self.status_code = status_code
