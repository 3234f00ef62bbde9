"""
User repository for account lookups and sign-up.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.user import User
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for the users table."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Insert a user row.

        Args:
            user_data: Dictionary with name, email and password

        Returns:
            Created user instance

        Raises:
            ConflictError: If the email is already registered
        """
        created_user = await self.create({
            "name": user_data["name"],
            "email": user_data["email"],
            "password": user_data["password"],
        })
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by exact email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", email)
