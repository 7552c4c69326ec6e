from sqlalchemy import Column, String, Text, Integer, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class Campus(ConfigRecordMixin, Base):
    __tablename__ = "master_campuses"

    name = Column(String(255), nullable=False)
    code = Column(String(50))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    country = Column(String(100))
    postal_code = Column(String(20))
    phone = Column(String(50))
    email = Column(String(255))
    website = Column(String(255))
    timezone = Column(String(64), default="UTC")
    capacity = Column(Integer, default=0)
    facilities = Column(JSON, default=list)

    def __repr__(self):
        return f"<Campus(name='{self.name}', city='{self.city}')>"
