"""Security utilities for JWT and password handling."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.core.exceptions import TokenConfigurationError

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class TokenStatus(str, Enum):
    """Outcome of verifying an access token."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: str
    phone: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenVerification:
    """Result of ``TokenService.verify``."""

    status: TokenStatus
    claims: TokenClaims | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        """Check whether the token was accepted."""
        return self.status is TokenStatus.VALID


class TokenService:
    """Issue and verify signed, time-limited access tokens."""

    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str | None,
        algorithm: str = "HS256",
        expire_days: int = 7,
    ):
        """Initialize with the signing secret and validity window."""
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(days=expire_days)

    @property
    def is_configured(self) -> bool:
        """Check whether a signing secret is available."""
        return bool(self.secret_key)

    def issue(self, user: dict[str, Any]) -> str:
        """
        Create an access token for a user.

        Args:
            user: User record with ``id`` and ``phone``

        Returns:
            Encoded JWT token

        Raises:
            TokenConfigurationError: If no signing secret is configured
        """
        if not self.is_configured:
            raise TokenConfigurationError()

        issued_at = datetime.now(UTC)
        to_encode = {
            "sub": str(user["id"]),
            "phone": user["phone"],
            "type": self.TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenVerification:
        """
        Check a token's signature and expiry.

        Args:
            token: Encoded JWT token

        Returns:
            Verification result; claims are set only when valid
        """
        if not self.is_configured:
            return TokenVerification(TokenStatus.ERROR, error="Server configuration error")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return TokenVerification(TokenStatus.EXPIRED)
        except JWTError:
            return TokenVerification(TokenStatus.INVALID)
        except Exception as e:
            return TokenVerification(TokenStatus.ERROR, error=str(e))

        user_id = payload.get("sub")
        phone = payload.get("phone")
        if (
            payload.get("type") != self.TOKEN_TYPE
            or not isinstance(user_id, str)
            or not isinstance(phone, str)
        ):
            return TokenVerification(TokenStatus.INVALID)

        claims = TokenClaims(
            user_id=user_id,
            phone=phone,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
        return TokenVerification(TokenStatus.VALID, claims=claims)
