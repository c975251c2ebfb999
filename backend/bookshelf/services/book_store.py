"""Record store for books."""
from typing import Any, Optional, Protocol

from sqlalchemy import Select, delete, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.exceptions import DuplicateIsbnError, StoreError
from bookshelf.core.logging import get_logger
from bookshelf.core.pagination import BookFilters
from bookshelf.models.book import Book

logger = get_logger("services.book_store")


class BookStore(Protocol):
    """Operations the request handlers need from the record store."""

    async def insert(self, record: dict[str, Any]) -> Book:
        ...

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        ...

    async def find_all(self, filters: BookFilters, limit: int, offset: int) -> list[Book]:
        ...

    async def count(self, filters: BookFilters) -> int:
        ...

    async def update(self, book_id: int, fields: dict[str, Any]) -> Optional[Book]:
        ...

    async def delete(self, book_id: int) -> bool:
        ...

    async def exists_by_isbn(self, isbn: str, exclude_id: Optional[int] = None) -> bool:
        ...

    async def ping(self) -> bool:
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_filters(query: Select, filters: BookFilters) -> Select:
    """Add the WHERE clauses for ``filters`` to ``query``."""
    if filters.year is not None:
        query = query.where(Book.published == filters.year)
    if filters.genre:
        query = query.where(Book.genre.ilike(f"%{_escape_like(filters.genre)}%", escape="\\"))
    if filters.author:
        query = query.where(Book.author.ilike(f"%{_escape_like(filters.author)}%", escape="\\"))
    if filters.isbn:
        query = query.where(Book.isbn == filters.isbn)
    return query


class SqlAlchemyBookStore:
    """``BookStore`` over an async SQLAlchemy session.

    Driver errors are logged and re-raised as ``StoreError`` so their text
    never reaches a client. A unique violation on ``isbn`` becomes
    ``DuplicateIsbnError``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _flush(self, isbn: Optional[str]) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Lost the race against a concurrent insert with the same ISBN
            logger.warning(f"Integrity error on books (isbn={isbn}): {e.orig}")
            raise DuplicateIsbnError(isbn) from e

    async def insert(self, record: dict[str, Any]) -> Book:
        book = Book(**record)
        try:
            self.db.add(book)
            await self._flush(book.isbn)
            await self.db.refresh(book)
        except SQLAlchemyError as e:
            logger.exception("Failed to insert book")
            raise StoreError() from e
        return book

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        try:
            result = await self.db.execute(select(Book).where(Book.id == book_id))
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load book {book_id}")
            raise StoreError() from e
        return result.scalar_one_or_none()

    async def find_all(self, filters: BookFilters, limit: int, offset: int) -> list[Book]:
        query = apply_filters(select(Book), filters)
        query = query.order_by(Book.id.asc()).limit(limit).offset(offset)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.exception("Failed to list books")
            raise StoreError() from e
        return list(result.scalars().all())

    async def count(self, filters: BookFilters) -> int:
        query = apply_filters(select(func.count()).select_from(Book), filters)
        try:
            return (await self.db.execute(query)).scalar_one()
        except SQLAlchemyError as e:
            logger.exception("Failed to count books")
            raise StoreError() from e

    async def update(self, book_id: int, fields: dict[str, Any]) -> Optional[Book]:
        book = await self.find_by_id(book_id)
        if book is None:
            return None

        for field, value in fields.items():
            setattr(book, field, value)
        try:
            await self._flush(book.isbn)
            await self.db.refresh(book)
        except SQLAlchemyError as e:
            logger.exception(f"Failed to update book {book_id}")
            raise StoreError() from e
        return book

    async def delete(self, book_id: int) -> bool:
        try:
            result = await self.db.execute(delete(Book).where(Book.id == book_id))
        except SQLAlchemyError as e:
            logger.exception(f"Failed to delete book {book_id}")
            raise StoreError() from e
        return result.rowcount > 0

    async def exists_by_isbn(self, isbn: str, exclude_id: Optional[int] = None) -> bool:
        query = select(Book.id).where(Book.isbn == isbn)
        if exclude_id is not None:
            query = query.where(Book.id != exclude_id)
        try:
            result = await self.db.execute(query.limit(1))
        except SQLAlchemyError as e:
            logger.exception("Failed to check ISBN uniqueness")
            raise StoreError() from e
        return result.first() is not None

    async def ping(self) -> bool:
        try:
            await self.db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.exception("Database ping failed")
            raise StoreError("Database unavailable") from e
        return True
