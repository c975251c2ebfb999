"""Authentication API routes."""
from fastapi import APIRouter, Depends

from bookshelf.core.exceptions import InvalidCredentialsError, ValidationFailedError
from bookshelf.core.logging import get_logger
from bookshelf.core.validation import MissingFields
from bookshelf.dependencies import get_credential_verifier
from bookshelf.schemas.auth import LoginRequest, Token
from bookshelf.schemas.common import ErrorResponse
from bookshelf.services.auth_service import CredentialVerifier, issue_token

logger = get_logger("api.auth")

router = APIRouter(tags=["Authentication"])


@router.post(
    "/login",
    response_model=Token,
    responses={
        400: {"model": ErrorResponse, "description": "Blank username or password."},
        401: {"model": ErrorResponse, "description": "Invalid credentials."},
    },
)
async def login(
    credentials: LoginRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> Token:
    """Login and get access token."""
    blank = tuple(
        name
        for name, value in (("username", credentials.username), ("password", credentials.password))
        if value is None or not value.strip()
    )
    if blank:
        raise ValidationFailedError(MissingFields(blank))

    if not await verifier.verify(credentials.username, credentials.password):
        logger.warning(f"Failed login for user '{credentials.username}'")
        raise InvalidCredentialsError()

    logger.info(f"User '{credentials.username}' logged in")
    return issue_token(credentials.username)
