from sqlalchemy import Column, DateTime, Boolean, Uuid
from sqlalchemy.sql import func
import uuid


class ConfigRecordMixin:
    """Columns shared by every configuration record."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Owner stamped on every insert/update
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
