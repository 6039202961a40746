"""
Tests for MembershipRepository
"""

import pytest
from datetime import timezone
from unittest.mock import Mock
from sqlalchemy.orm import Session

from repositories.membership_repository import MembershipRepository
from studio_database import Membership


class TestMembershipRepository:
    """Test MembershipRepository functionality"""

    @pytest.fixture
    def mock_session(self):
        """Mock database session"""
        return Mock(spec=Session)

    @pytest.fixture
    def repository(self, mock_session):
        """Create MembershipRepository instance with mocked session"""
        return MembershipRepository(session=mock_session)

    def test_find_membership_filters_by_user_and_studio(self, repository, mock_session):
        """Test lookup applies both filters"""
        membership = Membership(user_id=1, studio_id='studio-abc')
        query = mock_session.query.return_value
        query.filter.return_value = query
        query.first.return_value = membership

        result = repository.find_membership(1, 'studio-abc')

        assert result is membership
        mock_session.query.assert_called_once_with(Membership)
        assert query.filter.call_count == 2

    def test_find_membership_not_found(self, repository, mock_session):
        """Test missing membership returns None"""
        query = mock_session.query.return_value
        query.filter.return_value = query
        query.first.return_value = None

        assert repository.find_membership(1, 'studio-abc') is None

    def test_create_membership_defaults(self, repository, mock_session):
        """Test new memberships are active members joined now"""
        membership = repository.create_membership(5, 'studio-abc')

        assert membership.user_id == 5
        assert membership.studio_id == 'studio-abc'
        assert membership.role == 'member'
        assert membership.status == 'active'
        assert membership.joined_at.tzinfo == timezone.utc
        mock_session.add.assert_called_once_with(membership)
        mock_session.flush.assert_called_once()

    def test_create_membership_with_role(self, repository):
        """Test role and status can be overridden"""
        membership = repository.create_membership(5, 'studio-abc', role='instructor', status='paused')

        assert membership.role == 'instructor'
        assert membership.status == 'paused'

    def test_rollback(self, repository, mock_session):
        """Test rollback delegates to the session"""
        repository.rollback()

        mock_session.rollback.assert_called_once()
