"""Shared metadata and column helpers for the table definitions."""

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, MetaData, Uuid

# Metadata for all tables
metadata = MetaData()


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(UTC)


def uuid_primary_key() -> Column:
    """Application-generated UUID primary key."""
    return Column("id", Uuid, primary_key=True, default=uuid4)


def timestamp_columns() -> list[Column]:
    """Audit timestamps maintained on insert and update."""
    return [
        Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow, index=True),
        Column(
            "updated_at",
            DateTime(timezone=True),
            nullable=False,
            default=utcnow,
            onupdate=utcnow,
        ),
    ]
