"""Business logic services."""
from bookshelf.services.auth_service import AuthService, CredentialVerifier, issue_token
from bookshelf.services.book_service import BookService
from bookshelf.services.book_store import BookStore, SqlAlchemyBookStore

__all__ = [
    "AuthService",
    "BookService",
    "BookStore",
    "CredentialVerifier",
    "SqlAlchemyBookStore",
    "issue_token",
]
