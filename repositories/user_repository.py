"""
UserRepository - Data access layer for User entities
Acts as the identity store for member imports
"""

from typing import Optional
from repositories.base_repository import BaseRepository
from studio_database import User
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access"""

    def __init__(self, session, model_class=User):
        super().__init__(session, model_class)

    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find user by exact email address.

        Emails are stored lower-cased, so callers should normalise first.

        Args:
            email: Email to search for

        Returns:
            User or None
        """
        return self.find_one_by(email=email)

    def create_identity(self, email: str, name: str, phone: Optional[str] = None) -> User:
        """
        Create a new user account from imported member data.

        Args:
            email: Normalised email address
            name: Display name
            phone: Optional phone number as supplied

        Returns:
            The created user, flushed so its id is available
        """
        user = self.create(email=email, name=name, phone=phone)
        logger.debug(f"Created identity {user.id} for {email}")
        return user
