"""FastAPI dependencies."""

import json
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.exceptions import (
    BadRequestException,
    InternalServerException,
    UnauthorizedException,
)
from app.core.security import TokenService, TokenStatus
from app.database import get_db
from app.schemas.users import CurrentIdentity
from app.services.user_service import UserService

# Security; missing or non-Bearer headers are rejected below with our own message
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    """Token service the running application was built with."""
    return request.app.state.token_service


async def get_request_body(request: Request) -> dict[str, Any]:
    """
    Parse the JSON request body.

    An empty body reads as an empty object so that create operations can
    report every missing field.

    Raises:
        BadRequestException: If the body is not a JSON object
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except ValueError:
        raise BadRequestException("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise BadRequestException("Request body must be a JSON object")
    return body


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CurrentIdentity:
    """
    Authenticate the caller from an ``Authorization: Bearer`` header.

    The user is re-loaded on every request, so deleting an account revokes
    its outstanding tokens.

    Args:
        request: Incoming request; receives the caller's user_id for access logs
        credentials: Bearer token credentials
        tokens: Token service
        db: Database session

    Returns:
        Identity of the authenticated user

    Raises:
        UnauthorizedException: Missing, invalid or expired token, or unknown user
        InternalServerException: Any other verification fault
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Access token required")

    verification = tokens.verify(credentials.credentials)

    if verification.status is TokenStatus.EXPIRED:
        raise UnauthorizedException("Token expired")
    if verification.status is TokenStatus.INVALID:
        raise UnauthorizedException("Invalid token")
    if verification.status is TokenStatus.ERROR or verification.claims is None:
        raise InternalServerException(verification.error or "Token verification failed")

    try:
        user_id = UUID(verification.claims.user_id)
    except ValueError:
        raise UnauthorizedException("Invalid token")

    user = await UserService(db).get_user_by_id(user_id)
    if not user:
        raise UnauthorizedException("User not found")

    request.state.user_id = str(user["id"])
    structlog.contextvars.bind_contextvars(user_id=request.state.user_id)

    return CurrentIdentity.model_validate(user)


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
RequestBody = Annotated[dict[str, Any], Depends(get_request_body)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
CurrentUser = Annotated[CurrentIdentity, Depends(get_current_identity)]
