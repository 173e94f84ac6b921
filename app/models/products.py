"""Product model definition using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, Numeric, Table, Text

from app.models.base import metadata, timestamp_columns, uuid_primary_key

products = Table(
    "products",
    metadata,
    uuid_primary_key(),
    Column("name", Text, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("description", Text, nullable=True),
    *timestamp_columns(),
    CheckConstraint("price >= 0", name="products_price_check"),
)
