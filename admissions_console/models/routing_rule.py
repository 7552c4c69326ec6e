from sqlalchemy import Column, String, Text, Integer, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class LeadRoutingRule(ConfigRecordMixin, Base):
    __tablename__ = "lead_routing_rules"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    # Lower numbers are evaluated first
    priority = Column(Integer, default=0)
    # Serialized rule payloads, see schemas.rules
    conditions = Column(JSON, default=list)
    assignment_config = Column(JSON, default=dict)
