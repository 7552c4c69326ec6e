# Import all models so SQLAlchemy registers every table on Base.metadata
from .user import UserProfile
from .program import Program
from .campus import Campus
from .call_type import CallType
from .document_template import DocumentTemplate
from .lead_priority import LeadPriority
from .lead_status import LeadStatus
from .marketing_source import MarketingSource
from .notification_filter import NotificationFilter
from .team import Team, AdvisorTeam
from .communication_template import CommunicationTemplate
from .requirement import Requirement
from .routing_rule import LeadRoutingRule

__all__ = ['UserProfile', 'Program', 'Campus', 'CallType', 'DocumentTemplate',
           'LeadPriority', 'LeadStatus', 'MarketingSource', 'NotificationFilter',
           'Team', 'AdvisorTeam', 'CommunicationTemplate', 'Requirement',
           'LeadRoutingRule']
