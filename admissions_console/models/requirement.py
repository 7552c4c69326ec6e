from sqlalchemy import Column, String, Text, Boolean, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class Requirement(ConfigRecordMixin, Base):
    """Academic or entry requirement attached to programs."""
    __tablename__ = "master_requirements"

    title = Column(String(255), nullable=False)
    description = Column(Text)
    # academic, language, experience, health, age, other
    type = Column(String(50), default="academic")
    mandatory = Column(Boolean, default=True)
    details = Column(Text)
    minimum_grade = Column(String(50))
    alternatives = Column(JSON, default=list)
    category = Column(String(100), default="Custom")
    applicable_programs = Column(JSON, default=list)
