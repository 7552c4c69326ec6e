from sqlalchemy import Column, String, Text, JSON
from ..core.database import Base
from .mixins import ConfigRecordMixin


class NotificationFilter(ConfigRecordMixin, Base):
    __tablename__ = "master_notification_filters"

    name = Column(String(255), nullable=False)
    description = Column(Text)
    event_types = Column(JSON, default=list)
    # email, sms, in_app
    channels = Column(JSON, default=list)
    # Serialized list of rule conditions, see schemas.rules
    conditions = Column(JSON, default=list)
