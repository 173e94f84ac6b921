"""Product service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.core.fields import extract_field, extract_text
from app.core.validators import parse_identifier, parse_price, require_fields
from app.models.products import products

logger = structlog.get_logger()


class ProductService:
    """Service for product operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_product(self, body: dict[str, Any]) -> dict:
        """Create a product; name and price are required."""
        name = extract_text(body, "name")
        price = extract_field(body, "price")
        description = extract_field(body, "description")

        require_fields(
            [
                ("name", name),
                ("price", str(price.value).strip() if price.provided else ""),
            ]
        )

        values = {
            "name": name,
            "price": parse_price(price.value),
            "description": str(description.value).strip() if description.provided else None,
        }

        result = await self.db.execute(insert(products).values(**values).returning(products))
        await self.db.commit()

        product = dict(result.mappings().one())
        logger.info("product_created", product_id=str(product["id"]))
        return product

    async def list_products(self, name: str | None = None) -> list[dict]:
        """List products, newest first, optionally by name substring."""
        query = select(products).order_by(products.c.created_at.desc())
        if name:
            query = query.where(products.c.name.icontains(name.strip(), autoescape=True))

        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_product(self, product_id: str) -> dict:
        """Get product by ID."""
        key = parse_identifier(product_id, "product")
        return await self._get_existing(key)

    async def update_product(self, product_id: str, body: dict[str, Any]) -> dict:
        """Apply a partial update to a product."""
        key = parse_identifier(product_id, "product")
        product = await self._get_existing(key)

        values: dict[str, Any] = {}

        name = extract_field(body, "name")
        if name.provided:
            text = str(name.value).strip()
            if not text:
                raise ValidationException("name cannot be empty", fields=["name"])
            values["name"] = text

        price = extract_field(body, "price")
        if price.provided:
            values["price"] = parse_price(price.value)

        description = extract_field(body, "description")
        if description.provided:
            values["description"] = str(description.value).strip()

        if not values:
            return product

        stmt = update(products).where(products.c.id == key).values(**values).returning(products)
        result = await self.db.execute(stmt)
        await self.db.commit()

        updated = result.mappings().first()
        if not updated:
            raise NotFoundException("Product not found")
        return dict(updated)

    async def delete_product(self, product_id: str) -> dict:
        """Delete a product by ID."""
        key = parse_identifier(product_id, "product")
        product = await self._get_existing(key)

        await self.db.execute(delete(products).where(products.c.id == key))
        await self.db.commit()

        logger.info("product_deleted", product_id=str(key))
        return product

    async def _get_existing(self, key: UUID) -> dict:
        result = await self.db.execute(select(products).where(products.c.id == key))
        product = result.mappings().first()
        if not product:
            raise NotFoundException("Product not found")
        return dict(product)
