from sqlalchemy import Column, String, Text, Float
from ..core.database import Base
from .mixins import ConfigRecordMixin


class MarketingSource(ConfigRecordMixin, Base):
    __tablename__ = "master_marketing_sources"

    name = Column(String(255), nullable=False)
    # digital, event, referral, print, partner, other
    category = Column(String(50), default="digital")
    description = Column(Text)
    cost_per_lead = Column(Float)
    tracking_code = Column(String(100))
