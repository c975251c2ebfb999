"""Pydantic schemas."""
from bookshelf.schemas.auth import LoginRequest, Token, TokenIdentity
from bookshelf.schemas.book import (
    BookFiltersResponse,
    BookListResponse,
    BookResponse,
    PaginationMeta,
)
from bookshelf.schemas.common import BaseSchema, ErrorResponse, HealthResponse

__all__ = [
    # Common
    "BaseSchema",
    "ErrorResponse",
    "HealthResponse",
    # Auth
    "LoginRequest",
    "Token",
    "TokenIdentity",
    # Book
    "BookResponse",
    "BookFiltersResponse",
    "BookListResponse",
    "PaginationMeta",
]
