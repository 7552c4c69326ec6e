from sqlalchemy import Column, String, Text, Integer, Boolean, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class DocumentTemplate(ConfigRecordMixin, Base):
    __tablename__ = "master_document_templates"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    # transcript, identification, language_test, reference, other
    document_type = Column(String(50), default="other")
    category = Column(String(100))
    is_required = Column(Boolean, default=False)
    accepted_formats = Column(JSON, default=list)
    max_size_mb = Column(Integer, default=10)
    # Pipeline stages where the document is collected
    stages = Column(JSON, default=list)
