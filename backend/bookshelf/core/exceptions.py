"""Custom exceptions for the application."""
from typing import Any, Optional


class AppException(Exception):
    """Base application exception.

    ``error_code`` is the stable machine-readable code rendered as the
    ``error`` field of the response body; ``details`` are merged into it.
    """

    status_code: int = 400
    default_code: str = "bad_request"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON error body."""
        return {"error": self.error_code, "message": self.message, **self.details}


class AuthenticationError(AppException):
    """Authentication related errors."""

    status_code = 401
    default_code = "unauthenticated"

    def __init__(self, message: str = "Access token required", error_code: Optional[str] = None):
        super().__init__(message, error_code=error_code)


class TokenInvalidError(AuthenticationError):
    """Catch-all for tokens that fail verification."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, error_code="token_invalid")


class TokenExpiredError(AuthenticationError):
    """Token signature is valid but ``exp`` has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, error_code="token_expired")


class TokenMalformedError(AuthenticationError):
    """Token is structurally broken or its signature does not match."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message, error_code="token_malformed")


class TokenNotYetValidError(AuthenticationError):
    """Token ``nbf`` or ``iat`` lies in the future."""

    def __init__(self, message: str = "Token is not yet valid"):
        super().__init__(message, error_code="token_not_yet_valid")


class InvalidCredentialsError(AuthenticationError):
    """Username/password pair was rejected."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, error_code="invalid_credentials")


class ValidationFailedError(AppException):
    """Payload failed field validation.

    Wraps a validation outcome; the outcome's kind becomes the error code.
    """

    def __init__(self, outcome: Any):
        self.outcome = outcome
        super().__init__(
            outcome.message,
            error_code=outcome.error_code,
            details=outcome.details(),
        )


class InvalidInputError(AppException):
    """Payload rejected by the security sanitizer."""

    default_code = "invalid_input"

    def __init__(self, field: str):
        super().__init__(
            f"Invalid characters detected in field '{field}'",
            details={"field": field},
        )


class InvalidIdFormatError(AppException):
    """Path identifier is not a positive decimal integer."""

    default_code = "invalid_id_format"

    def __init__(self, message: str = "ID must be a positive integer"):
        super().__init__(message)


class IdTooLargeError(AppException):
    """Path identifier exceeds the identifier range."""

    default_code = "id_too_large"

    def __init__(self, limit: int):
        super().__init__(
            f"ID must not exceed {limit}",
            details={"max_id": limit},
        )


class PaginationError(AppException):
    """Invalid ``page`` or ``limit`` query parameter."""

    default_code = "invalid_pagination"

    def __init__(self, message: str, field: str):
        super().__init__(message, details={"field": field})


class FilterError(AppException):
    """Invalid filter query parameter."""

    default_code = "invalid_filter"

    def __init__(self, message: str, field: str):
        super().__init__(message, details={"field": field})


class InvalidRequestError(AppException):
    """Request could not be parsed (e.g. body is not a JSON object)."""

    default_code = "invalid_request"


class NotFoundError(AppException):
    """Resource not found errors."""

    status_code = 404
    default_code = "not_found"

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} with id {resource_id} not found",
            details={"id": resource_id},
        )


class DuplicateIsbnError(AppException):
    """Another book already carries this ISBN."""

    status_code = 409
    default_code = "duplicate_isbn"

    def __init__(self, isbn: Optional[str]):
        super().__init__(
            "A book with this ISBN already exists",
            details={"field": "isbn", "isbn": isbn},
        )


class InternalError(AppException):
    """Unexpected server-side failure; the message is safe to show."""

    status_code = 500
    default_code = "internal_error"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


class StoreError(InternalError):
    """The record store failed. Driver details are logged, never returned."""


class RequestTimeoutError(AppException):
    """Request took longer than the configured timeout."""

    status_code = 504
    default_code = "request_timeout"

    def __init__(self, timeout: float):
        super().__init__(
            "Request timed out",
            details={"timeout_seconds": timeout},
        )
