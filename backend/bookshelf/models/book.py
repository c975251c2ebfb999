"""Book model."""
from typing import Any, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.core.validation import BOOK_FIELDS
from bookshelf.database import Base


class Book(Base):
    """A single book record."""

    __tablename__ = "books"
    # IDs are never reused, also on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(1000), nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    published: Mapped[int] = mapped_column(Integer, nullable=False)
    isbn: Mapped[Optional[str]] = mapped_column(String(32), unique=True, nullable=True)
    genre: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pages: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    publisher: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict[str, Any]:
        """Return the client-settable fields as a plain dict."""
        return {field: getattr(self, field) for field in BOOK_FIELDS}

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title!r}, isbn={self.isbn})>"
