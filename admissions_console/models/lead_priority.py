from sqlalchemy import Column, String, Text, Integer
from ..core.database import Base
from .mixins import ConfigRecordMixin


class LeadPriority(ConfigRecordMixin, Base):
    __tablename__ = "master_lead_priorities"

    name = Column(String(100), nullable=False)
    # 1 is the most urgent
    level = Column(Integer, default=1)
    color = Column(String(7), default="#EF4444")
    sla_hours = Column(Integer, default=24)
    description = Column(Text)
