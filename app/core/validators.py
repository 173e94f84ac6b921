"""Normalization and validation helpers shared by the resource services."""

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from app.core.exceptions import BadRequestException, ValidationException

BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
GENDERS = ("male", "female", "other")
CARD_STATUSES = ("active", "inactive", "completed")
DEFAULT_CARD_STATUS = "active"

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Column limits: users.phone, *.mobile_phone, profiles.email, products.price Numeric(12, 2)
PHONE_MAX_LENGTH = 32
EMAIL_MAX_LENGTH = 320
PRICE_CENTS = Decimal("0.01")
PRICE_LIMIT = Decimal("1e10")

TRUE_STRINGS = {"true", "1", "yes"}
FALSE_STRINGS = {"false", "0", "no"}


def normalize_phone(phone: Any) -> str:
    """Trim and strip every whitespace run, giving the uniqueness key."""
    if phone is None:
        return ""
    return WHITESPACE_PATTERN.sub("", str(phone).strip())


def normalize_email(email: Any) -> str:
    """Lowercase and validate an email address."""
    value = str(email).strip().lower()
    if len(value) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(value):
        raise ValidationException("Invalid email format", fields=["email"])
    return value


def check_phone_length(phone: str, field: str) -> str:
    """Reject phone numbers longer than the stored column allows."""
    if len(phone) > PHONE_MAX_LENGTH:
        raise ValidationException(
            f"{field} must be at most {PHONE_MAX_LENGTH} characters",
            fields=[field],
        )
    return phone


def canonical_blood_type(blood_type: Any) -> str:
    """Uppercase a blood type and check it is one of the eight groups."""
    value = str(blood_type).strip().upper()
    if value not in BLOOD_TYPES:
        raise ValidationException(
            f"Invalid blood type. Must be one of: {', '.join(BLOOD_TYPES)}",
            fields=["bloodType"],
        )
    return value


def canonical_gender(gender: Any) -> str:
    """Lowercase a gender and check it against the allowed values."""
    value = str(gender).strip().lower()
    if value not in GENDERS:
        raise ValidationException(
            f"Invalid gender. Must be one of: {', '.join(GENDERS)}",
            fields=["gender"],
        )
    return value


def canonical_status(status: Any) -> str:
    """Lowercase a card status and check it against the allowed values."""
    value = str(status).strip().lower()
    if value not in CARD_STATUSES:
        raise ValidationException(
            f"Invalid status. Must be one of: {', '.join(CARD_STATUSES)}",
            fields=["status"],
        )
    return value


def parse_date_of_birth(value: Any) -> date:
    """Parse an ISO-8601 date or datetime into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationException("Invalid date of birth format", fields=["dateOfBirth"])


def parse_bool(value: Any, field: str) -> bool:
    """Accept JSON booleans and the usual true/false spellings."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ValidationException(f"Invalid {field}. Must be true or false", fields=[field])


def parse_price(value: Any) -> Decimal:
    """Parse a non-negative price rounded to cents that fits the price column."""
    if isinstance(value, bool):
        raise ValidationException("Price must be a non-negative number", fields=["price"])
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationException("Price must be a non-negative number", fields=["price"])
    if not price.is_finite() or price < 0:
        raise ValidationException("Price must be a non-negative number", fields=["price"])

    if price < PRICE_LIMIT:
        price = price.quantize(PRICE_CENTS, rounding=ROUND_HALF_UP)
    if price >= PRICE_LIMIT:
        raise ValidationException(
            f"Price must be less than {PRICE_LIMIT:f}",
            fields=["price"],
        )
    return price


def validate_emergency_contact(value: Any) -> dict[str, str]:
    """Check an emergency contact carries a name, phone and relationship."""
    if not isinstance(value, Mapping):
        raise ValidationException(
            "Invalid emergency contact. Expected an object with name, phone, relationship",
            fields=["emergencyContact"],
        )

    contact = {}
    for key in ("name", "phone", "relationship"):
        item = value.get(key)
        contact[key] = "" if item is None else str(item).strip()

    missing = [key for key, item in contact.items() if not item]
    if missing:
        raise ValidationException(
            f"Invalid emergency contact. Missing: {', '.join(missing)}",
            fields=["emergencyContact"],
        )
    return contact


def require_fields(values: Iterable[tuple[str, Any]]) -> None:
    """
    Raise one error naming every empty required field.

    Args:
        values: Pairs of (field name, extracted value) in reporting order

    Raises:
        ValidationException: If any value is empty
    """
    missing = [name for name, value in values if value is None or value == ""]
    if missing:
        raise ValidationException(
            f"Missing required fields: {', '.join(missing)}",
            fields=missing,
        )


def parse_identifier(value: str, resource: str) -> UUID:
    """Parse a path identifier, distinguishing malformed keys from absent ones."""
    try:
        return UUID(str(value))
    except ValueError:
        raise BadRequestException(f"Invalid {resource} ID format")

