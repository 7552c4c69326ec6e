from sqlalchemy import Column, String, Text, Integer, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class CommunicationTemplate(ConfigRecordMixin, Base):
    __tablename__ = "communication_templates"

    name = Column(String(255), nullable=False)
    # email, sms, meeting
    type = Column(String(20), nullable=False, default="email")
    subject = Column(String(500))
    content = Column(Text, nullable=False)
    # Merge variables referenced by the content, e.g. "first_name"
    variables = Column(JSON, default=list)
    usage_count = Column(Integer, default=0)

    def __repr__(self):
        return f"<CommunicationTemplate(name='{self.name}', type='{self.type}')>"
