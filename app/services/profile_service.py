"""Profile service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from app.core.fields import ExtractedField, extract_field, extract_text
from app.core.validators import (
    canonical_blood_type,
    canonical_gender,
    check_phone_length,
    normalize_email,
    parse_bool,
    parse_date_of_birth,
    parse_identifier,
    require_fields,
    validate_emergency_contact,
)
from app.models.profiles import profiles
from app.schemas.users import CurrentIdentity

logger = structlog.get_logger()

# Text fields that may be changed but never blanked
REQUIRED_TEXT_FIELDS = (
    ("firstName", "first_name"),
    ("lastName", "last_name"),
    ("mobilePhone", "mobile_phone"),
    ("location", "location"),
)


class ProfileService:
    """Service for profile operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_profile(self, owner: CurrentIdentity, body: dict[str, Any]) -> dict:
        """
        Create the authenticated user's profile.

        Args:
            owner: Authenticated user
            body: Request body

        Returns:
            Created profile

        Raises:
            ValidationException: Missing fields or invalid values
            ConflictException: If the user already has a profile or the email is taken
        """
        first_name = extract_text(body, "firstName")
        last_name = extract_text(body, "lastName")
        email = extract_text(body, "email").lower()
        mobile_phone = extract_text(body, "mobilePhone")
        location = extract_text(body, "location")

        require_fields(
            [
                ("firstName", first_name),
                ("lastName", last_name),
                ("email", email),
                ("mobilePhone", mobile_phone),
                ("location", location),
            ]
        )

        values: dict[str, Any] = {
            "user_id": owner.id,
            "first_name": first_name,
            "last_name": last_name,
            "email": normalize_email(email),
            "mobile_phone": check_phone_length(mobile_phone, "mobilePhone"),
            "location": location,
        }
        values.update(self._optional_values(body, skip_blank=True))

        if await self._find_one(profiles.c.user_id == owner.id):
            raise ConflictException("User already has a profile")

        if await self._find_one(profiles.c.email == values["email"]):
            raise ConflictException("Email is already registered")

        try:
            result = await self.db.execute(insert(profiles).values(**values).returning(profiles))
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent create; report it like the pre-checks
            await self.db.rollback()
            if await self._find_one(profiles.c.user_id == owner.id):
                raise ConflictException("User already has a profile")
            raise ConflictException("Email is already registered")

        profile = dict(result.mappings().one())
        logger.info("profile_created", profile_id=str(profile["id"]), user_id=str(owner.id))
        return profile

    async def list_profiles(
        self,
        blood_type: str | None = None,
        location: str | None = None,
        is_available: str | None = None,
        gender: str | None = None,
    ) -> list[dict]:
        """
        List profiles, newest first.

        ``is_available`` matches true only for the literal string "true".
        """
        conditions = []

        if blood_type:
            conditions.append(profiles.c.blood_type == blood_type.strip().upper())
        if location:
            conditions.append(profiles.c.location.icontains(location.strip(), autoescape=True))
        if is_available is not None:
            conditions.append(profiles.c.is_available == (is_available == "true"))
        if gender:
            conditions.append(profiles.c.gender == gender.strip().lower())

        query = select(profiles).order_by(profiles.c.created_at.desc())
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_profile(self, profile_id: str) -> dict:
        """
        Get profile by ID.

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If profile not found
        """
        key = parse_identifier(profile_id, "profile")
        return await self._get_existing(key)

    async def get_profile_for_user(self, user_id: UUID) -> dict:
        """Get the profile owned by a user."""
        profile = await self._find_one(profiles.c.user_id == user_id)
        if not profile:
            raise NotFoundException("Profile not found")
        return profile

    async def update_profile(
        self,
        profile_id: str,
        identity: CurrentIdentity,
        body: dict[str, Any],
    ) -> dict:
        """
        Apply a partial update to the caller's own profile.

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If profile not found
            ForbiddenException: If the caller does not own the profile
            ValidationException: If a provided field is invalid
            ConflictException: If the new email belongs to another profile
        """
        key = parse_identifier(profile_id, "profile")
        profile = await self._get_existing(key)
        if profile["user_id"] != identity.id:
            raise ForbiddenException("Access denied. You can only update your own profile")

        values: dict[str, Any] = {}

        for field, column in REQUIRED_TEXT_FIELDS:
            extracted = extract_field(body, field)
            if extracted.provided:
                text = str(extracted.value).strip()
                if not text:
                    raise ValidationException(f"{field} cannot be empty", fields=[field])
                if column == "mobile_phone":
                    check_phone_length(text, field)
                values[column] = text

        email = extract_field(body, "email")
        if email.provided:
            values["email"] = normalize_email(email.value)

        values.update(self._optional_values(body))

        if not values:
            return profile

        if "email" in values and values["email"] != profile["email"]:
            if await self._find_one(profiles.c.email == values["email"]):
                raise ConflictException("Email is already registered")

        stmt = update(profiles).where(profiles.c.id == key).values(**values).returning(profiles)
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException("Email is already registered")

        updated = result.mappings().first()
        if not updated:
            raise NotFoundException("Profile not found")

        logger.info("profile_updated", profile_id=str(key), fields=sorted(values))
        return dict(updated)

    async def delete_profile(self, profile_id: str, identity: CurrentIdentity) -> dict:
        """
        Delete the caller's own profile.

        Returns:
            The deleted profile

        Raises:
            BadRequestException: If the ID is malformed
            NotFoundException: If profile not found
            ForbiddenException: If the caller does not own the profile
        """
        key = parse_identifier(profile_id, "profile")
        profile = await self._get_existing(key)
        if profile["user_id"] != identity.id:
            raise ForbiddenException("Access denied. You can only delete your own profile")

        await self.db.execute(delete(profiles).where(profiles.c.id == key))
        await self.db.commit()

        logger.info("profile_deleted", profile_id=str(key))
        return profile

    @staticmethod
    def _optional_values(body: dict[str, Any], skip_blank: bool = False) -> dict[str, Any]:
        """
        Validate the optional profile fields present in the body.

        With ``skip_blank`` an empty string counts as not provided, which is
        how create treats optional fields.
        """
        values: dict[str, Any] = {}

        def given(extracted: ExtractedField) -> bool:
            if not extracted.provided:
                return False
            return not (skip_blank and str(extracted.value).strip() == "")

        blood_type = extract_field(body, "bloodType")
        if given(blood_type):
            values["blood_type"] = canonical_blood_type(blood_type.value)

        date_of_birth = extract_field(body, "dateOfBirth")
        if given(date_of_birth):
            values["date_of_birth"] = parse_date_of_birth(date_of_birth.value)

        gender = extract_field(body, "gender")
        if given(gender):
            values["gender"] = canonical_gender(gender.value)

        emergency_contact = extract_field(body, "emergencyContact")
        if given(emergency_contact):
            values["emergency_contact"] = validate_emergency_contact(emergency_contact.value)

        medical_history = extract_field(body, "medicalHistory")
        if given(medical_history):
            values["medical_history"] = str(medical_history.value).strip()

        is_available = extract_field(body, "isAvailable")
        if given(is_available):
            values["is_available"] = parse_bool(is_available.value, "isAvailable")

        return values

    async def _get_existing(self, key: UUID) -> dict:
        profile = await self._find_one(profiles.c.id == key)
        if not profile:
            raise NotFoundException("Profile not found")
        return profile

    async def _find_one(self, condition: Any) -> dict | None:
        result = await self.db.execute(select(profiles).where(condition))
        profile = result.mappings().first()
        return dict(profile) if profile else None
