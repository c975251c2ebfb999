"""Security utilities for JWT authentication."""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Security
from fastapi.security import APIKeyHeader
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from passlib.context import CryptContext

from bookshelf.config import settings
from bookshelf.core.exceptions import (
    AuthenticationError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMalformedError,
    TokenNotYetValidError,
)
from bookshelf.schemas.auth import TokenIdentity

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Raw Authorization header; scheme parsing happens in extract_bearer_token
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

BEARER_SCHEME = "bearer"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(
    username: str,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a JWT access token."""
    now = issued_at or datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)

    payload = {
        "sub": username,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        payload,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from a ``Bearer <token>`` header value.

    Raises:
        AuthenticationError: header missing, another scheme, or no token.
    """
    if not authorization:
        raise AuthenticationError()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != BEARER_SCHEME or not token:
        raise AuthenticationError()
    return token


def _timestamp(claims: dict[str, Any], name: str) -> Optional[float]:
    value = claims.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TokenInvalidError(f"Claim '{name}' must be a number")
    return float(value)


def decode_token(token: str, now: Optional[datetime] = None) -> TokenIdentity:
    """Decode and validate a JWT token.

    ``exp`` is checked by jose; ``nbf`` and ``iat`` are checked here so a
    token from the future gets its own error. All checks allow
    ``jwt_leeway_seconds`` of clock skew.

    Raises:
        TokenExpiredError, TokenMalformedError, TokenNotYetValidError,
        TokenInvalidError
    """
    leeway = settings.jwt_leeway_seconds
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_nbf": False, "verify_iat": False, "leeway": leeway},
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTClaimsError:
        raise TokenInvalidError()
    except JWTError:
        raise TokenMalformedError()

    current = (now or datetime.now(timezone.utc)).timestamp()
    for name in ("nbf", "iat"):
        moment = _timestamp(claims, name)
        if moment is not None and moment > current + leeway:
            raise TokenNotYetValidError()

    expires_at = _timestamp(claims, "exp")
    username = claims.get("sub")
    if expires_at is None or not isinstance(username, str) or not username:
        raise TokenInvalidError()

    return TokenIdentity(
        username=username,
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


async def get_current_identity(
    authorization: Optional[str] = Security(authorization_header),
) -> TokenIdentity:
    """Dependency that requires a valid bearer token."""
    return decode_token(extract_bearer_token(authorization))
