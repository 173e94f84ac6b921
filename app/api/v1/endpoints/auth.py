"""Authentication endpoints."""

from fastapi import APIRouter, status

from app.dependencies import AppSettings, DatabaseSession, RequestBody, Tokens
from app.schemas.auth import AuthResponse
from app.schemas.base import MessageResponse
from app.schemas.users import UserResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register with phone and password",
)
async def signup(
    body: RequestBody,
    db: DatabaseSession,
    tokens: Tokens,
    settings: AppSettings,
) -> AuthResponse:
    """
    Create an account and return its first access token.

    Accepts firstName, lastName, phone, password and confirmPassword (legacy
    snake_case and lowercase spellings are also accepted).
    """
    auth_service = AuthService(db, tokens, settings.password_min_length)
    user, token = await auth_service.signup(body)

    return AuthResponse(
        message="Signup successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in with phone and password",
)
async def login(
    body: RequestBody,
    db: DatabaseSession,
    tokens: Tokens,
    settings: AppSettings,
) -> AuthResponse:
    """Exchange phone/password credentials for an access token."""
    auth_service = AuthService(db, tokens, settings.password_min_length)
    user, token = await auth_service.login(body)

    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Log out",
)
async def logout() -> MessageResponse:
    """
    Log out.

    Tokens are stateless; the client discards its token.
    """
    return MessageResponse(message="Logout successful")
