"""Book service: the request pipeline for each book operation."""
from typing import Any, Mapping, Optional

from bookshelf.core.exceptions import DuplicateIsbnError, NotFoundError
from bookshelf.core.identifiers import parse_book_id
from bookshelf.core.logging import get_logger
from bookshelf.core.pagination import build_fetch_spec, build_pagination
from bookshelf.core.sanitizer import require_clean_book
from bookshelf.core.validation import require_valid_book
from bookshelf.models.book import Book
from bookshelf.services.book_store import BookStore

logger = get_logger("services.books")


class BookService:
    """Service for book operations.

    Every operation parses and validates its input before touching the
    store: IDs first, then the body through the sanitizer and the field
    validator.
    """

    def __init__(self, store: BookStore):
        self.store = store

    async def list_books(self, params: Mapping[str, Optional[str]]) -> dict[str, Any]:
        """Fetch one page of books matching the query parameters."""
        spec = build_fetch_spec(params)
        total = await self.store.count(spec.filters)
        books = await self.store.find_all(spec.filters, spec.limit, spec.offset)
        return {
            "data": books,
            "filters": spec.filters.supplied(),
            "pagination": build_pagination(total, spec.page, spec.limit),
        }

    async def get_book(self, raw_id: str) -> Book:
        """Get a book by its path ID."""
        book_id = parse_book_id(raw_id)
        book = await self.store.find_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    async def _ensure_unique_isbn(self, isbn: Optional[str], exclude_id: Optional[int] = None) -> None:
        if isbn and await self.store.exists_by_isbn(isbn, exclude_id=exclude_id):
            raise DuplicateIsbnError(isbn)

    async def create_book(self, payload: dict[str, Any]) -> Book:
        """Create a new book."""
        require_clean_book(payload)
        record = require_valid_book(payload)
        await self._ensure_unique_isbn(record.get("isbn"))

        book = await self.store.insert(record)
        logger.info(f"Created book {book.id}")
        return book

    async def update_book(self, raw_id: str, payload: dict[str, Any]) -> Book:
        """Update a book.

        The stored record and the body are merged, keys in the body
        winning, and the merged record is validated as a whole.
        """
        book_id = parse_book_id(raw_id)
        require_clean_book(payload)

        existing = await self.store.find_by_id(book_id)
        if existing is None:
            raise NotFoundError("Book", book_id)

        merged = {**existing.to_dict(), **payload}
        record = require_valid_book(merged)
        await self._ensure_unique_isbn(record.get("isbn"), exclude_id=book_id)

        updated = await self.store.update(book_id, record)
        if updated is None:
            # Deleted between the lookup and the write
            raise NotFoundError("Book", book_id)
        logger.info(f"Updated book {book_id}")
        return updated

    async def delete_book(self, raw_id: str) -> None:
        """Delete a book."""
        book_id = parse_book_id(raw_id)
        if not await self.store.delete(book_id):
            raise NotFoundError("Book", book_id)
        logger.info(f"Deleted book {book_id}")
