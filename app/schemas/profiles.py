"""Profile schemas for responses."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel

from app.schemas.base import CamelModel, UTCDateTime


class EmergencyContact(BaseModel):
    """Person to reach in an emergency."""

    name: str
    phone: str
    relationship: str


class ProfileResponse(CamelModel):
    """Profile as returned by the API."""

    id: UUID
    user_id: UUID
    first_name: str
    last_name: str
    email: str
    mobile_phone: str
    location: str
    blood_type: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    emergency_contact: EmergencyContact | None = None
    medical_history: str = ""
    is_available: bool = True
    created_at: UTCDateTime
    updated_at: UTCDateTime


class ProfileEnvelope(BaseModel):
    """Single profile response."""

    message: str
    profile: ProfileResponse


class ProfileListResponse(BaseModel):
    """Profile list response."""

    message: str
    count: int
    profiles: list[ProfileResponse]
