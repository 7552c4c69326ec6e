from sqlalchemy import Column, String, Text, Integer, Boolean
from ..core.database import Base
from .mixins import ConfigRecordMixin


class CallType(ConfigRecordMixin, Base):
    __tablename__ = "master_call_types"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(100))
    default_duration_minutes = Column(Integer, default=15)
    color = Column(String(7), default="#10B981")
    requires_follow_up = Column(Boolean, default=False)
