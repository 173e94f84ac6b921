"""Profile model definition using SQLAlchemy Core."""

from sqlalchemy import JSON, Boolean, Column, Date, ForeignKey, String, Table, Text, Uuid

from app.models.base import metadata, timestamp_columns, uuid_primary_key

profiles = Table(
    "profiles",
    metadata,
    uuid_primary_key(),
    # One profile per user
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    ),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    Column("email", String(320), nullable=False, unique=True, index=True),
    Column("mobile_phone", String(32), nullable=False, index=True),
    Column("location", Text, nullable=False),
    Column("blood_type", String(3), nullable=True),
    Column("date_of_birth", Date, nullable=True),
    Column("gender", String(10), nullable=True),
    # {"name": ..., "phone": ..., "relationship": ...}
    Column("emergency_contact", JSON, nullable=True),
    Column("medical_history", Text, nullable=False, default=""),
    Column("is_available", Boolean, nullable=False, default=True),
    *timestamp_columns(),
)
