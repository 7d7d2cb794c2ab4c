"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """
        Add a new record to the session.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

