"""Authentication schemas."""

from pydantic import BaseModel

from app.schemas.users import UserResponse


class AuthResponse(BaseModel):
    """Signup/login response with token and user info."""

    message: str
    token: str
    user: UserResponse
