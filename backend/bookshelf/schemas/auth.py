"""Authentication Pydantic schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Schema for login.

    Both fields are optional here so that blank and missing values are
    reported together as ``missing_fields`` by the login route.
    """

    username: Optional[str] = None
    password: Optional[str] = None


class Token(BaseModel):
    """JWT token response."""

    token: str
    token_type: str = "bearer"
    expires_in: int


class TokenIdentity(BaseModel):
    """Identity extracted from a verified token."""

    username: str
    expires_at: datetime
