"""FastAPI application entry point."""
import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.api import api_router
from bookshelf.config import settings
from bookshelf.core.exceptions import (
    AppException,
    InvalidRequestError,
    RequestTimeoutError,
    StoreError,
)
from bookshelf.core.logging import get_logger, setup_logging
from bookshelf.database import AsyncSessionLocal, close_db, init_db
from bookshelf.dependencies import get_book_store
from bookshelf.schemas.common import ErrorResponse, HealthResponse
from bookshelf.services.auth_service import AuthService
from bookshelf.services.book_store import BookStore

setup_logging(settings.log_level)
logger = get_logger("main")


async def seed_login_account() -> None:
    """Create the configured placeholder account if it is missing."""
    async with AsyncSessionLocal() as session:
        created = await AuthService(session).ensure_user(
            settings.admin_username, settings.admin_password
        )
        await session.commit()
    if created:
        logger.warning(
            f"Seeded login account '{settings.admin_username}'; "
            "change ADMIN_PASSWORD outside development"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    # Startup
    await init_db()
    await seed_login_account()
    logger.info(f"{settings.app_name} started")
    yield
    # Shutdown
    await close_db()
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(
    title=settings.app_name,
    description="Book records API with JWT authentication",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_timeout(request: Request, call_next):
    """Answer 504 when a request runs past the configured timeout."""
    timeout = settings.request_timeout_seconds
    try:
        return await asyncio.wait_for(call_next(request), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"{request.method} {request.url.path} timed out after {timeout}s")
        exc = RequestTimeoutError(timeout)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}")
    elif exc.status_code == 400:
        # Field name only; submitted values are never logged
        logger.info(
            f"{request.method} {request.url.path} rejected: {exc.error_code} "
            f"field={exc.details.get('field') or exc.details.get('fields')}"
        )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle requests FastAPI could not parse (e.g. non-object bodies)."""
    error = InvalidRequestError("Request body must be a JSON object with the expected fields")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, wrong methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "not_found" if exc.status_code == 404 else "http_error",
            "message": exc.detail,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    if settings.debug:
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": str(exc),
                "type": type(exc).__name__,
            },
        )

    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Internal server error"},
    )


# Include API router
app.include_router(api_router)


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"model": ErrorResponse, "description": "Database unreachable."}},
)
async def health_check(store: BookStore = Depends(get_book_store)):
    """Liveness plus database reachability."""
    try:
        await store.ping()
    except StoreError:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "error": "database_error", "message": "Database unavailable"},
        )
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs" if settings.debug else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
