"""Help card schemas for responses."""

from uuid import UUID

from pydantic import BaseModel

from app.schemas.base import CamelModel, UTCDateTime


class CardResponse(CamelModel):
    """Card as returned by the API."""

    id: UUID
    owner_id: UUID
    name: str
    location: str
    blood_type: str
    mobile_phone: str
    description: str = ""
    status: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class CardEnvelope(BaseModel):
    """Single card response."""

    message: str
    card: CardResponse


class CardListResponse(BaseModel):
    """Card list response."""

    message: str
    count: int
    cards: list[CardResponse]
