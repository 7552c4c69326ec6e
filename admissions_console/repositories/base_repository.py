"""
Base repository with common CRUD operations.

A single generic repository serves every configuration entity; entity
specifics (model class, natural key, default ordering) are passed in by the
caller rather than encoded in per-entity subclasses.
"""

from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Sequence
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common database operations.

    This class implements the Repository pattern to abstract database operations
    and provide a clean interface for data access.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def create(self, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of attributes for the new record

        Returns:
            The created database object

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            db_obj = self.model(**self._known_fields(obj_in))
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def get(self, id: UUID) -> Optional[ModelType]:
        """
        Retrieve a record by ID.

        Args:
            id: The UUID of the record to retrieve

        Returns:
            The database object if found, None otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_multi(
        self,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence[str]] = None
    ) -> List[ModelType]:
        """
        Retrieve multiple records with optional filtering and pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return (all when None)
            filters: Dictionary of field:value equality filters
            order_by: Column names; a leading "-" sorts descending

        Returns:
            List of database objects
        """
        query = self._filtered(filters)

        for field in order_by or ():
            descending = field.startswith("-")
            column = getattr(self.model, field.lstrip("-"), None)
            if column is not None:
                query = query.order_by(column.desc() if descending else column.asc())

        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def contains(self, field: str, value: Any) -> List[ModelType]:
        """
        Retrieve records whose array (JSON list) field contains a value.

        JSON arrays are compared in Python so the query works on every
        backend, not only on PostgreSQL array operators.

        Args:
            field: Name of the JSON list column
            value: The element to look for

        Returns:
            List of matching database objects
        """
        if not hasattr(self.model, field):
            return []
        return [
            obj for obj in self.db.query(self.model).all()
            if value in (getattr(obj, field) or [])
        ]

    def update(
        self,
        *,
        db_obj: ModelType,
        obj_in: Dict[str, Any]
    ) -> ModelType:
        """
        Update a record in the database.

        Args:
            db_obj: The existing database object to update
            obj_in: Dictionary of attributes to update

        Returns:
            The updated database object

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            for field, value in self._known_fields(obj_in).items():
                setattr(db_obj, field, value)

            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def upsert(
        self,
        *,
        obj_in: Dict[str, Any],
        match_on: Sequence[str]
    ) -> ModelType:
        """
        Insert a record, or update the one matching the natural key.

        Args:
            obj_in: Dictionary of attributes
            match_on: Field names forming the natural key

        Returns:
            The created or updated database object
        """
        existing = self._filtered(
            {field: obj_in.get(field) for field in match_on}
        ).first()
        if existing is not None:
            return self.update(db_obj=existing, obj_in=obj_in)
        return self.create(obj_in=obj_in)

    def delete(self, *, id: UUID) -> bool:
        """
        Delete a record from the database.

        Args:
            id: The UUID of the record to delete

        Returns:
            True if deletion was successful, False if record not found

        Raises:
            SQLAlchemyError: If database operation fails
        """
        try:
            obj = self.get(id)
            if obj:
                self.db.delete(obj)
                self.db.commit()
                return True
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            raise e

    def exists(self, id: UUID) -> bool:
        """
        Check if a record exists in the database.

        Args:
            id: The UUID of the record to check

        Returns:
            True if record exists, False otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).first() is not None

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """
        Count records in the database with optional filtering.

        Args:
            filters: Dictionary of field:value pairs to filter by

        Returns:
            Number of records matching the criteria
        """
        return self._filtered(filters).count()

    def _filtered(self, filters: Optional[Dict[str, Any]]):
        query = self.db.query(self.model)
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)
        return query

    def _known_fields(self, obj_in: Dict[str, Any]) -> Dict[str, Any]:
        columns = self.model.__table__.columns.keys()
        return {field: value for field, value in obj_in.items() if field in columns}
