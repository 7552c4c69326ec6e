from sqlalchemy import Column, String, Text, Integer, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class Team(ConfigRecordMixin, Base):
    """External recruiter team."""
    __tablename__ = "master_teams"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    team_type = Column(String(50), default="external")
    region = Column(String(100))
    contact_email = Column(String(255))
    specializations = Column(JSON, default=list)


class AdvisorTeam(ConfigRecordMixin, Base):
    """Internal admissions advisor team used by lead routing."""
    __tablename__ = "advisor_teams"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    region = Column(String(100))
    max_daily_assignments = Column(Integer, default=30)
    specializations = Column(JSON, default=list)
