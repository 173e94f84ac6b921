"""Product schemas for responses."""

from uuid import UUID

from pydantic import BaseModel

from app.schemas.base import CamelModel, UTCDateTime


class ProductResponse(CamelModel):
    """Product as returned by the API."""

    id: UUID
    name: str
    price: float
    description: str | None = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class ProductEnvelope(BaseModel):
    """Single product response."""

    message: str
    product: ProductResponse


class ProductListResponse(BaseModel):
    """Product list response."""

    message: str
    count: int
    products: list[ProductResponse]
