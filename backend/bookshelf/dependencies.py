"""FastAPI dependency providers for stores and services."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db
from bookshelf.services.auth_service import AuthService, CredentialVerifier
from bookshelf.services.book_service import BookService
from bookshelf.services.book_store import BookStore, SqlAlchemyBookStore


def get_book_store(db: AsyncSession = Depends(get_db)) -> BookStore:
    """Dependency provider for the request's book store."""
    return SqlAlchemyBookStore(db)


def get_book_service(store: BookStore = Depends(get_book_store)) -> BookService:
    """Dependency provider for BookService."""
    return BookService(store)


def get_credential_verifier(db: AsyncSession = Depends(get_db)) -> CredentialVerifier:
    """Dependency provider for the login credential check."""
    return AuthService(db)
