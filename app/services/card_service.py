"""Help card service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from app.core.fields import extract_field, extract_text
from app.core.validators import (
    DEFAULT_CARD_STATUS,
    canonical_blood_type,
    canonical_status,
    check_phone_length,
    parse_identifier,
    require_fields,
)
from app.models.cards import cards
from app.schemas.users import CurrentIdentity

logger = structlog.get_logger()


class CardService:
    """Service for help card operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_card(self, owner: CurrentIdentity, body: dict[str, Any]) -> dict:
        """
        Create a card owned by the authenticated user.

        Args:
            owner: Authenticated user
            body: Request body

        Returns:
            Created card

        Raises:
            ValidationException: Missing fields or invalid blood type/status
        """
        name = extract_text(body, "name")
        location = extract_text(body, "location")
        blood_type = extract_text(body, "bloodType")
        mobile_phone = extract_text(body, "mobilePhone")
        description = extract_text(body, "description")
        status = extract_text(body, "status", default=DEFAULT_CARD_STATUS)

        require_fields(
            [
                ("name", name),
                ("location", location),
                ("bloodType", blood_type),
                ("mobilePhone", mobile_phone),
            ]
        )

        values = {
            "owner_id": owner.id,
            "name": name,
            "location": location,
            "blood_type": canonical_blood_type(blood_type),
            "mobile_phone": check_phone_length(mobile_phone, "mobilePhone"),
            "description": description,
            "status": canonical_status(status),
        }

        result = await self.db.execute(insert(cards).values(**values).returning(cards))
        await self.db.commit()

        card = dict(result.mappings().one())
        logger.info("card_created", card_id=str(card["id"]), owner_id=str(owner.id))
        return card

    async def list_cards(
        self,
        blood_type: str | None = None,
        status: str | None = None,
        location: str | None = None,
    ) -> list[dict]:
        """
        List cards, newest first.

        Args:
            blood_type: Exact match after uppercasing
            status: Exact match after lowercasing
            location: Case-insensitive substring

        Returns:
            Matching cards
        """
        conditions = []

        if blood_type:
            conditions.append(cards.c.blood_type == blood_type.strip().upper())
        if status:
            conditions.append(cards.c.status == status.strip().lower())
        if location:
            conditions.append(cards.c.location.icontains(location.strip(), autoescape=True))

        query = select(cards).order_by(cards.c.created_at.desc())
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_card(self, card_id: str) -> dict:
        """
        Get card by ID.

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If card not found
        """
        key = parse_identifier(card_id, "card")
        return await self._get_existing(key)

    async def update_card(
        self,
        card_id: str,
        identity: CurrentIdentity,
        body: dict[str, Any],
    ) -> dict:
        """
        Apply a partial update to a card the caller owns.

        Only fields present in the body are touched; each goes through the
        same validation as on create.

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If card not found
            ForbiddenException: If the caller does not own the card
            ValidationException: If a provided field is invalid
        """
        key = parse_identifier(card_id, "card")
        card = await self._get_existing(key)
        self._ensure_owner(card, identity, "update")

        values: dict[str, Any] = {}

        for field, column in (
            ("name", "name"),
            ("location", "location"),
            ("mobilePhone", "mobile_phone"),
        ):
            extracted = extract_field(body, field)
            if extracted.provided:
                text = str(extracted.value).strip()
                if not text:
                    raise ValidationException(f"{field} cannot be empty", fields=[field])
                if column == "mobile_phone":
                    check_phone_length(text, field)
                values[column] = text

        blood_type = extract_field(body, "bloodType")
        if blood_type.provided:
            values["blood_type"] = canonical_blood_type(blood_type.value)

        description = extract_field(body, "description")
        if description.provided:
            values["description"] = str(description.value).strip()

        status = extract_field(body, "status")
        if status.provided:
            values["status"] = canonical_status(status.value)

        if not values:
            return card

        stmt = update(cards).where(cards.c.id == key).values(**values).returning(cards)
        result = await self.db.execute(stmt)
        await self.db.commit()

        updated = result.mappings().first()
        if not updated:
            raise NotFoundException("Card not found")

        logger.info("card_updated", card_id=str(key), fields=sorted(values))
        return dict(updated)

    async def delete_card(self, card_id: str, identity: CurrentIdentity) -> dict:
        """
        Delete a card the caller owns.

        Returns:
            The deleted card

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If card not found
            ForbiddenException: If the caller does not own the card
        """
        key = parse_identifier(card_id, "card")
        card = await self._get_existing(key)
        self._ensure_owner(card, identity, "delete")

        await self.db.execute(delete(cards).where(cards.c.id == key))
        await self.db.commit()

        logger.info("card_deleted", card_id=str(key))
        return card

    async def _get_existing(self, key: UUID) -> dict:
        result = await self.db.execute(select(cards).where(cards.c.id == key))
        card = result.mappings().first()
        if not card:
            raise NotFoundException("Card not found")
        return dict(card)

    @staticmethod
    def _ensure_owner(card: dict, identity: CurrentIdentity, action: str) -> None:
        if card["owner_id"] != identity.id:
            raise ForbiddenException(f"Access denied. You can only {action} your own cards")
