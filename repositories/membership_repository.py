"""
MembershipRepository - Data access layer for Membership entities
Isolates all database queries related to studio memberships
"""

from typing import Optional
from repositories.base_repository import BaseRepository
from studio_database import Membership
from utils.datetime_utils import utc_now


class MembershipRepository(BaseRepository[Membership]):
    """Repository for Membership data access"""

    def __init__(self, session, model_class=Membership):
        super().__init__(session, model_class)

    def find_membership(self, user_id: int, studio_id: str) -> Optional[Membership]:
        """
        Find the membership tying a user to a studio.

        Args:
            user_id: User ID
            studio_id: Studio identifier

        Returns:
            Membership or None
        """
        return self.find_one_by(user_id=user_id, studio_id=studio_id)

    def create_membership(self, user_id: int, studio_id: str,
                          role: str = 'member', status: str = 'active') -> Membership:
        """
        Create a membership dated now.

        Args:
            user_id: User ID
            studio_id: Studio identifier
            role: Membership role (default: member)
            status: Membership status (default: active)

        Returns:
            The created membership
        """
        return self.create(
            user_id=user_id,
            studio_id=studio_id,
            role=role,
            status=status,
            joined_at=utc_now()
        )
