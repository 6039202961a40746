"""
Base Repository - Abstract base class for all repositories
Implements common database operations following the Repository Pattern
"""

from abc import ABC
from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

# Type variable for model classes
T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository with common CRUD operations.

    Reads and writes log SQLAlchemy errors and re-raise them: callers such as
    the member import decide per row whether a storage failure is fatal.
    """

    def __init__(self, session: Session, model_class: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            session: SQLAlchemy database session
            model_class: The model class this repository manages
        """
        self.session = session
        self.model_class = model_class

    # CREATE Operations

    def create(self, **kwargs) -> T:
        """
        Create a new entity.

        Args:
            **kwargs: Attributes for the new entity

        Returns:
            Created entity instance

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            entity = self.model_class(**kwargs)
            self.session.add(entity)
            self.session.flush()  # Flush to get ID and hit unique constraints without committing
            logger.debug(f"Created {self.model_class.__name__} with id {entity.id}")
            return entity
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_class.__name__}: {e}")
            raise

    # READ Operations

    def find_one_by(self, **filters) -> Optional[T]:
        """
        Find single entity by specific field values.

        Args:
            **filters: Field-value pairs to filter by

        Returns:
            First matching entity or None
        """
        try:
            query = self.session.query(self.model_class)
            for field, value in filters.items():
                if hasattr(self.model_class, field):
                    query = query.filter(getattr(self.model_class, field) == value)
            return query.first()
        except SQLAlchemyError as e:
            logger.error(f"Error finding {self.model_class.__name__} by filters: {e}")
            raise

    # Transaction Management

    def commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error committing transaction: {e}")
            self.session.rollback()
            raise

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.session.rollback()
