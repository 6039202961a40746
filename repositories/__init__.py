"""
Repository Layer - Data Access Abstraction
Implements the Repository Pattern for database isolation
"""

from .base_repository import BaseRepository
from .user_repository import UserRepository
from .membership_repository import MembershipRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'MembershipRepository'
]
