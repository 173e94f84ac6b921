"""User schemas for responses."""

from uuid import UUID

from app.schemas.base import CamelModel


class UserResponse(CamelModel):
    """Public view of a user account; never carries the password hash."""

    id: UUID
    first_name: str
    last_name: str
    phone: str


class CurrentIdentity(CamelModel):
    """Authenticated caller attached to a request."""

    id: UUID
    phone: str
    first_name: str
    last_name: str
