"""Authentication service for signup and login."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, UnauthorizedException, ValidationException
from app.core.fields import extract_field, extract_text
from app.core.security import TokenService, get_password_hash, verify_password
from app.core.validators import check_phone_length, normalize_phone, require_fields
from app.services.user_service import UserService

logger = structlog.get_logger()


class AuthService:
    """Authentication service for phone/password accounts."""

    def __init__(
        self,
        db: AsyncSession,
        token_service: TokenService,
        password_min_length: int = 6,
    ):
        """Initialize auth service with its collaborators."""
        self.db = db
        self.tokens = token_service
        self.password_min_length = password_min_length
        self.users = UserService(db)

    async def signup(self, body: dict[str, Any]) -> tuple[dict, str]:
        """
        Register a new account and issue its first token.

        Args:
            body: Request body

        Returns:
            Tuple of (public user dict, access token)

        Raises:
            ValidationException: Missing fields, password mismatch or weak password
            ConflictException: If the phone is already registered
            TokenConfigurationError: If no signing secret is configured
        """
        first_name = extract_text(body, "firstName")
        last_name = extract_text(body, "lastName")
        phone = normalize_phone(extract_field(body, "phone").value)
        password = self._password(body, "password")
        confirm_password = self._password(body, "confirmPassword")

        require_fields(
            [
                ("firstName", first_name),
                ("lastName", last_name),
                ("phone", phone),
                ("password", password),
                ("confirmPassword", confirm_password),
            ]
        )
        check_phone_length(phone, "phone")

        if password != confirm_password:
            raise ValidationException(
                "Password and confirmPassword do not match",
                fields=["confirmPassword"],
            )

        if len(password) < self.password_min_length:
            raise ValidationException(
                f"Password must be at least {self.password_min_length} characters",
                fields=["password"],
            )

        if await self.users.get_user_by_phone(phone):
            raise ConflictException("Phone number is already registered")

        user = await self.users.create_user(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            password_hash=get_password_hash(password),
        )

        # Issue before committing so a missing secret leaves no orphan account
        token = self.tokens.issue(user)
        await self.db.commit()

        logger.info("user_signed_up", user_id=str(user["id"]))
        return user, token

    async def login(self, body: dict[str, Any]) -> tuple[dict, str]:
        """
        Check phone/password credentials and issue a token.

        Raises:
            ValidationException: If phone or password is missing
            UnauthorizedException: If the credentials do not match
        """
        phone = normalize_phone(extract_field(body, "phone").value)
        password = self._password(body, "password")

        if not phone or not password:
            raise ValidationException(
                "Missing required fields: phone, password",
                fields=["phone", "password"],
            )

        user = await self.users.get_user_by_phone(phone, include_password_hash=True)
        if not user or not verify_password(password, user.pop("password_hash")):
            logger.info("login_failed", phone=phone)
            raise UnauthorizedException("Invalid phone or password")

        token = self.tokens.issue(user)
        logger.info("user_logged_in", user_id=str(user["id"]))
        return user, token

    @staticmethod
    def _password(body: dict[str, Any], field: str) -> str:
        """Passwords are taken verbatim, never trimmed."""
        extracted = extract_field(body, field)
        return str(extracted.value) if extracted.provided else ""
