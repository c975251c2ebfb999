"""Authentication service."""
from datetime import timedelta
from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.config import settings
from bookshelf.core.security import create_access_token, get_password_hash, verify_password
from bookshelf.models.user import User
from bookshelf.schemas.auth import Token


class CredentialVerifier(Protocol):
    """Checks a username/password pair."""

    async def verify(self, username: str, password: str) -> bool:
        ...


class AuthService:
    """Service for authentication operations backed by the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_user(self, username: str, password: str) -> User:
        """Create a new login account."""
        existing = await self.get_user_by_username(username)
        if existing:
            raise ValueError(f"User '{username}' already exists")

        user = User(
            username=username,
            password_hash=get_password_hash(password),
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def ensure_user(self, username: str, password: str) -> bool:
        """Create the account unless it exists. Returns True if created."""
        if await self.get_user_by_username(username):
            return False
        await self.create_user(username, password)
        return True

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """Authenticate a user by username and password."""
        user = await self.get_user_by_username(username)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def verify(self, username: str, password: str) -> bool:
        return await self.authenticate_user(username, password) is not None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username."""
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()


def issue_token(username: str) -> Token:
    """Create an access token response for ``username``."""
    expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    return Token(
        token=create_access_token(username, expires_delta=expires_delta),
        token_type="bearer",
        expires_in=int(expires_delta.total_seconds()),
    )
