from sqlalchemy import Column, String, Text, Integer, Boolean
from ..core.database import Base
from .mixins import ConfigRecordMixin


class LeadStatus(ConfigRecordMixin, Base):
    __tablename__ = "master_lead_statuses"

    name = Column(String(100), nullable=False)
    description = Column(Text)
    color = Column(String(7), default="#6366F1")
    order_index = Column(Integer, default=0)
    is_default = Column(Boolean, default=False)
    is_final = Column(Boolean, default=False)
