"""User model definition using SQLAlchemy Core."""

from sqlalchemy import Column, String, Table, Text

from app.models.base import metadata, timestamp_columns, uuid_primary_key

users = Table(
    "users",
    metadata,
    uuid_primary_key(),
    Column("first_name", Text, nullable=False),
    Column("last_name", Text, nullable=False),
    # Normalized phone (all whitespace removed) is the login identifier
    Column("phone", String(32), nullable=False, unique=True, index=True),
    # Write-only: excluded from every read except the login lookup
    Column("password_hash", Text, nullable=False),
    *timestamp_columns(),
)

# Columns safe to return from reads
USER_PUBLIC_COLUMNS = [column for column in users.c if column.name != "password_hash"]
