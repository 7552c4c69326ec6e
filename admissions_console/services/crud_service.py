"""
Configuration Entity Service Layer

Business logic shared by every configuration entity: required-field
validation, owner stamping, create/update/delete/duplicate and the
conversion of database rows into plain records for tables and responses.

Key Features:
- One service class parameterised by an EntityDescriptor
- Local validation before any database call
- Every mutation requires a user and stamps ``user_id``
- Duplicate records with a " (Copy)" title

Errors are reported the same way throughout the service layer:
- ValueError: validation failure
- NotFoundError (a ValueError): missing record
- PermissionError: no authenticated user
- SQLAlchemyError: raised by the repository after rollback
"""

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.user import UserProfile
from ..repositories.base_repository import BaseRepository
from .entity_registry import EntityDescriptor

logger = logging.getLogger(__name__)

# Fields never copied into a duplicate or sent back on save
SYSTEM_FIELDS = ("id", "user_id", "created_at", "updated_at", "usage_count")

FormData = Union[Mapping[str, Any], BaseModel]


class ConfigEntityService:
    """
    Service class for one configuration entity.

    Responsibilities:
    - Validate required fields and schema constraints
    - Enforce the authenticated-user guard on mutations
    - Delegate persistence to the generic repository
    - Format rows for the table and API
    """

    def __init__(self, descriptor: EntityDescriptor, db: Session):
        """
        Initialize the service.

        Args:
            descriptor (EntityDescriptor): The entity being managed
            db (Session): SQLAlchemy database session
        """
        self.descriptor = descriptor
        self.db = db
        self.repository = BaseRepository(descriptor.model, db)

    # Reads

    def array_fields(self) -> List[str]:
        return [column.key for column in self.descriptor.columns if column.type == "array"]

    def list_records(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        Return rows in the descriptor's default order.

        Filters on scalar columns are equality matches; filters on array
        columns keep rows whose list contains the value.
        """
        filters = dict(filters or {})
        members = {
            field: filters.pop(field) for field in self.array_fields() if field in filters
        }
        records = self.repository.get_multi(
            filters=filters,
            order_by=self.descriptor.order_by
        )
        for field, value in members.items():
            matching = {obj.id for obj in self.repository.contains(field, value)}
            records = [record for record in records if record.id in matching]
        return records

    def get_record(self, record_id: UUID) -> Any:
        """
        Get a single row by id.

        Raises:
            NotFoundError: If the row does not exist
        """
        record = self.repository.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.descriptor.label} not found")
        return record

    def to_row(self, record: Any) -> Dict[str, Any]:
        """Convert a database row into a plain record dictionary."""
        return self.descriptor.response_schema.model_validate(record).model_dump()

    def list_rows(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [self.to_row(record) for record in self.list_records(filters)]

    # Validation

    def validate_required(self, data: Mapping[str, Any], partial: bool = False) -> None:
        """
        Check required fields are present and not blank.

        Args:
            data: Form data or update payload
            partial: Only check required fields that are present in ``data``

        Raises:
            ValueError: "<Label> is required" for the first blank field
        """
        for field, label in self.descriptor.required_fields:
            if partial and field not in data:
                continue
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValueError(f"{label} is required")

    def _clean(self, data: FormData, partial: bool) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=partial)
        data = {k: v for k, v in dict(data).items() if k not in SYSTEM_FIELDS}
        self.validate_required(data, partial=partial)
        for field, _ in self.descriptor.required_fields:
            if isinstance(data.get(field), str):
                data[field] = data[field].strip()
        return data

    def build_create_payload(self, data: FormData) -> Dict[str, Any]:
        """Validate full form data against the create schema."""
        cleaned = self._clean(data, partial=False)
        return self.descriptor.create_schema.model_validate(cleaned).model_dump(mode="json")

    def build_update_payload(self, data: FormData) -> Dict[str, Any]:
        """Validate a partial payload; only fields that were sent are kept."""
        cleaned = self._clean(data, partial=True)
        return self.descriptor.update_schema.model_validate(cleaned).model_dump(
            mode="json", exclude_unset=True)

    @staticmethod
    def require_user(user: Optional[UserProfile]) -> UserProfile:
        if user is None:
            raise PermissionError("Not authenticated")
        return user

    @staticmethod
    def _stamp(payload: Dict[str, Any], user: UserProfile) -> Dict[str, Any]:
        payload["user_id"] = user.id
        return payload

    def _derive(self, payload: Dict[str, Any], record: Any = None) -> Dict[str, Any]:
        if self.descriptor.derive_fields is None:
            return payload
        return self.descriptor.derive_fields(payload, record)

    # Mutations

    def create_record(self, data: FormData, user: Optional[UserProfile]) -> Any:
        """
        Insert a new row owned by ``user``.

        Raises:
            ValueError: Validation failure
            PermissionError: No user
        """
        payload = self.build_create_payload(data)
        self.require_user(user)
        record = self.repository.create(obj_in=self._stamp(self._derive(payload), user))
        logger.info(f"Created {self.descriptor.key} {record.id} by user {user.id}")
        return record

    def update_record(self, record_id: UUID, data: FormData,
                      user: Optional[UserProfile]) -> Any:
        """
        Update a row by id and re-stamp the owner.

        Raises:
            ValueError: Validation failure
            NotFoundError: Row not found
            PermissionError: No user
        """
        payload = self.build_update_payload(data)
        self.require_user(user)
        record = self.get_record(record_id)
        payload = self._derive(payload, record)
        record = self.repository.update(db_obj=record, obj_in=self._stamp(payload, user))
        logger.info(f"Updated {self.descriptor.key} {record_id} by user {user.id}")
        return record

    def delete_record(self, record_id: UUID, user: Optional[UserProfile]) -> None:
        """
        Permanently delete a row by id.

        Raises:
            NotFoundError: Row not found
            PermissionError: No user
        """
        self.require_user(user)
        if not self.repository.exists(record_id):
            raise NotFoundError(f"{self.descriptor.label} not found")
        self.repository.delete(id=record_id)
        logger.info(f"Deleted {self.descriptor.key} {record_id} by user {user.id}")

    def duplicate_payload(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Copy a record for re-use as a new form, minus identity fields."""
        duplicated = {k: copy.deepcopy(v) for k, v in row.items() if k not in SYSTEM_FIELDS}
        title_field = self.descriptor.title_field
        duplicated[title_field] = f"{row.get(title_field) or ''} (Copy)"
        return duplicated

    def duplicate_record(self, record_id: UUID, user: Optional[UserProfile]) -> Any:
        self.require_user(user)
        row = self.to_row(self.get_record(record_id))
        return self.create_record(self.duplicate_payload(row), user)

    def toggle_active(self, record_id: UUID, user: Optional[UserProfile]) -> Any:
        """Flip the ``is_active`` flag of a row."""
        self.require_user(user)
        record = self.get_record(record_id)
        return self.repository.update(
            db_obj=record,
            obj_in={"is_active": not record.is_active, "user_id": user.id}
        )

    def upsert_record(self, data: FormData, user: Optional[UserProfile]) -> Any:
        """Insert or update by the descriptor's natural key."""
        payload = self.build_create_payload(data)
        self.require_user(user)
        return self.repository.upsert(obj_in=self._stamp(self._derive(payload), user),
                                      match_on=self.descriptor.natural_key)


def error_message(exc: Exception) -> str:
    """A short, user-facing description of a validation error."""
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid value")
        return f"{field}: {message}" if field else message
    return str(exc)
