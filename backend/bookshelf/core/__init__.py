"""Core utilities."""
from bookshelf.core.exceptions import (
    AppException,
    AuthenticationError,
    DuplicateIsbnError,
    FilterError,
    IdTooLargeError,
    InternalError,
    InvalidCredentialsError,
    InvalidIdFormatError,
    InvalidInputError,
    InvalidRequestError,
    NotFoundError,
    PaginationError,
    RequestTimeoutError,
    StoreError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    TokenNotYetValidError,
    ValidationFailedError,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "TokenInvalidError",
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenNotYetValidError",
    "InvalidCredentialsError",
    "ValidationFailedError",
    "InvalidInputError",
    "InvalidIdFormatError",
    "IdTooLargeError",
    "PaginationError",
    "FilterError",
    "InvalidRequestError",
    "NotFoundError",
    "DuplicateIsbnError",
    "InternalError",
    "StoreError",
    "RequestTimeoutError",
]
