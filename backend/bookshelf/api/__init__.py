"""API routes."""
from fastapi import APIRouter

from bookshelf.api.auth import router as auth_router
from bookshelf.api.books import router as books_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(books_router)

__all__ = ["api_router"]
