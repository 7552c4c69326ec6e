from sqlalchemy import Column, String, Text, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class Program(ConfigRecordMixin, Base):
    __tablename__ = "master_programs"

    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=False)
    description = Column(Text)
    # undergraduate, graduate, diploma, certificate
    type = Column(String(50), default="undergraduate")
    duration = Column(String(100))
    campus = Column(String(255))
    # on-campus, online, hybrid
    delivery_method = Column(String(50), default="on-campus")
    status = Column(String(50), default="active")
    color = Column(String(7), default="#3B82F6")
    category = Column(String(100))
    tags = Column(JSON, default=list)
    entry_requirements = Column(JSON, default=list)
    document_requirements = Column(JSON, default=list)
    fee_structure = Column(JSON, default=dict)

    def __repr__(self):
        return f"<Program(code='{self.code}', name='{self.name}')>"
