"""Database models."""

from app.models.base import metadata
from app.models.cards import cards
from app.models.products import products
from app.models.profiles import profiles
from app.models.users import users

__all__ = [
    "cards",
    "metadata",
    "products",
    "profiles",
    "users",
]
