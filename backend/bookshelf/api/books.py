"""Book API routes.

Path IDs and query parameters are taken as plain strings and parsed by
the service, so malformed values produce this API's own 400 errors rather
than framework validation errors.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from bookshelf.core.security import get_current_identity
from bookshelf.dependencies import get_book_service
from bookshelf.models.book import Book
from bookshelf.schemas.book import BookListResponse, BookResponse
from bookshelf.schemas.common import ErrorResponse
from bookshelf.services.book_service import BookService

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token."}},
)

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid ID or payload."}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Book not found."}}
_CONFLICT = {409: {"model": ErrorResponse, "description": "Duplicate ISBN."}}


@router.get(
    "",
    response_model=BookListResponse,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse, "description": "Invalid pagination or filter."}},
)
async def list_books(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size, 1-100"),
    year: Optional[str] = Query(None, description="Exact published year"),
    genre: Optional[str] = Query(None, description="Case-insensitive substring"),
    author: Optional[str] = Query(None, description="Case-insensitive substring"),
    isbn: Optional[str] = Query(None, description="Exact ISBN"),
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """List books with pagination and filters."""
    return await service.list_books(
        {
            "page": page,
            "limit": limit,
            "year": year,
            "genre": genre,
            "author": author,
            "isbn": isbn,
        }
    )


@router.get("/{book_id}", response_model=BookResponse, responses={**_BAD_REQUEST, **_NOT_FOUND})
async def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Get a book by ID."""
    return await service.get_book(book_id)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_CONFLICT},
)
async def create_book(
    payload: dict[str, Any] = Body(...),
    service: BookService = Depends(get_book_service),
) -> Book:
    """Create a new book."""
    return await service.create_book(payload)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_CONFLICT},
)
async def update_book(
    book_id: str,
    payload: dict[str, Any] = Body(...),
    service: BookService = Depends(get_book_service),
) -> Book:
    """Update a book. Only fields present in the body are replaced."""
    return await service.update_book(book_id, payload)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
)
async def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book."""
    await service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
