"""User service for credential storage."""

from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.models.users import USER_PUBLIC_COLUMNS, users


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        phone: str,
        password_hash: str,
    ) -> dict:
        """
        Insert a new user.

        The caller is responsible for committing.

        Raises:
            ConflictException: If the phone is already registered
        """
        stmt = (
            insert(users)
            .values(
                first_name=first_name,
                last_name=last_name,
                phone=phone,
                password_hash=password_hash,
            )
            .returning(*USER_PUBLIC_COLUMNS)
        )

        try:
            result = await self.db.execute(stmt)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictException("Phone number is already registered")

        user = result.mappings().first()
        if not user:
            raise ValueError("Failed to create user")
        return dict(user)

    async def get_user_by_id(self, user_id: UUID) -> dict | None:
        """Get user by ID, without the password hash."""
        query = select(*USER_PUBLIC_COLUMNS).where(users.c.id == user_id)
        result = await self.db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_phone(
        self,
        phone: str,
        include_password_hash: bool = False,
    ) -> dict | None:
        """
        Get user by normalized phone.

        Args:
            phone: Normalized phone number
            include_password_hash: Also select the stored hash (login only)

        Returns:
            User data or None
        """
        columns = list(users.c) if include_password_hash else USER_PUBLIC_COLUMNS
        query = select(*columns).where(users.c.phone == phone)
        result = await self.db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user; outstanding tokens stop working on next use."""
        result = await self.db.execute(delete(users).where(users.c.id == user_id))
        await self.db.commit()
        return result.rowcount > 0
