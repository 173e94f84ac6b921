"""Request body field extraction across accepted spellings."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger()

# Canonical spelling first, then historical aliases still accepted from clients.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "firstName": ("firstName", "first_name", "firstname"),
    "lastName": ("lastName", "last_name", "lastname"),
    "phone": ("phone", "Phone", "phoneNumber", "phone_number", "numberPhone", "number_phone"),
    "password": ("password",),
    "confirmPassword": ("confirmPassword", "confirm_password"),
    "email": ("email", "Email"),
    "mobilePhone": ("mobilePhone", "mobile_phone", "phone", "Phone"),
    "location": ("location", "Location"),
    "bloodType": ("bloodType", "blood_type"),
    "dateOfBirth": ("dateOfBirth", "date_of_birth", "dob"),
    "gender": ("gender", "Gender"),
    "emergencyContact": ("emergencyContact", "emergency_contact"),
    "medicalHistory": ("medicalHistory", "medical_history"),
    "isAvailable": ("isAvailable", "is_available"),
    "name": ("name", "Name"),
    "description": ("description", "Description"),
    "status": ("status", "Status"),
    "price": ("price", "Price"),
}


@dataclass(frozen=True)
class ExtractedField:
    """Value pulled from a request body and the key it was found under."""

    value: Any = None
    alias: str | None = None

    @property
    def provided(self) -> bool:
        """Whether any accepted spelling carried a non-null value."""
        return self.alias is not None


NOT_PROVIDED = ExtractedField()


def extract(body: Mapping[str, Any] | None, aliases: Sequence[str]) -> ExtractedField:
    """
    Return the first non-null value among ``aliases``.

    Args:
        body: Parsed request body
        aliases: Accepted keys, canonical spelling first

    Returns:
        The matched value and alias, or ``NOT_PROVIDED``
    """
    if not body:
        return NOT_PROVIDED

    for alias in aliases:
        value = body.get(alias)
        if value is not None:
            if alias != aliases[0]:
                logger.debug("deprecated_field_alias", field=aliases[0], alias=alias)
            return ExtractedField(value=value, alias=alias)

    return NOT_PROVIDED


def extract_field(body: Mapping[str, Any] | None, field: str) -> ExtractedField:
    """Extract a logical field using its entry in ``FIELD_ALIASES``."""
    return extract(body, FIELD_ALIASES[field])


def extract_text(body: Mapping[str, Any] | None, field: str, default: str = "") -> str:
    """Extract a field as a trimmed string, ``default`` when not provided."""
    extracted = extract_field(body, field)
    if not extracted.provided:
        return default
    return str(extracted.value).strip()
