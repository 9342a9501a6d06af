"""User domain service."""

import logging
from typing import Optional

from billtrack.database.base import Database
from billtrack.domain.entities import User as UserEntity, UserRole
from billtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_username,
    invalid_choice,
    user_not_found,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self,
        username: str,
        password: str,
        name: str,
        email: str,
        role: str = UserRole.ORDINARY.value,
    ) -> int:
        """Create a user.

        Args:
            username: Unique login name
            password: Credential, stored as given
            name: Display name
            email: Contact email
            role: "admin" or "ordinary"

        Returns:
            User ID

        Raises:
            ConflictError: If the username is taken
            ValidationError: If the role is unknown
        """
        try:
            role = UserRole(role).value
        except ValueError:
            raise ValidationError(invalid_choice("role", role, [r.value for r in UserRole])) from None

        if self.db.get_user_by_username(username) is not None:
            raise ConflictError(duplicate_username(username))

        user_id = self.db.create_user(
            username=username, password=password, name=name, email=email, role=role
        )
        logger.info("Created user %d (%s)", user_id, username)
        return user_id

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID."""
        return self.db.get_user(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserEntity]:
        """Get user by username."""
        return self.db.get_user_by_username(username)

    def list_users(self) -> list[UserEntity]:
        """List all users."""
        return self.db.list_users()

    def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        self.db.delete_user(user_id)
