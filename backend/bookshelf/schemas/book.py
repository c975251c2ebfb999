"""Book Pydantic schemas.

Request bodies are taken as raw JSON objects and checked by
``bookshelf.core.validation``, so only response shapes live here.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bookshelf.schemas.common import BaseSchema


class BookResponse(BaseSchema):
    """Schema for book response."""

    id: int
    title: str
    author: str
    published: int
    isbn: Optional[str] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None


class BookFiltersResponse(BaseModel):
    """Filters echoed back on a listing; only supplied ones are set."""

    year: Optional[int] = None
    genre: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None


class PaginationMeta(BaseSchema):
    """Pagination metadata, serialized in camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total: int
    total_pages: int
    current_page: int
    limit: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None


class BookListResponse(BaseModel):
    """Paginated, filtered book listing."""

    data: list[BookResponse]
    filters: BookFiltersResponse
    pagination: PaginationMeta
