"""Custom application exceptions.

Persistence errors (``sqlalchemy.exc.IntegrityError`` and friends) are not
wrapped here; services let them propagate and the HTTP layer renders them.
"""


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        headers: dict[str, str] | None = None,
    ):
        """Initialize exception with message, status code and response headers."""
        self.message = message
        self.status_code = status_code
        self.headers = headers
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Raised when the caller has no valid session."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401, headers={"WWW-Authenticate": "Bearer"})


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class ConflictException(AppException):
    """Resource conflict exception."""

    def __init__(self, message: str = "Resource conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)
