"""SQLAlchemy models."""
from bookshelf.models.book import Book
from bookshelf.models.user import User

__all__ = [
    "Book",
    "User",
]
