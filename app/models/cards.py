"""Help card model definition using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Table, Text, Uuid

from app.models.base import metadata, timestamp_columns, uuid_primary_key

cards = Table(
    "cards",
    metadata,
    uuid_primary_key(),
    Column(
        "owner_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("name", Text, nullable=False),
    Column("location", Text, nullable=False),
    Column("blood_type", String(3), nullable=False, index=True),
    Column("mobile_phone", String(32), nullable=False, index=True),
    Column("description", Text, nullable=False, default=""),
    Column("status", String(16), nullable=False, default="active", index=True),
    *timestamp_columns(),
    CheckConstraint(
        "status IN ('active', 'inactive', 'completed')",
        name="cards_status_check",
    ),
)
