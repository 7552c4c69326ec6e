"""
Entity Registry

Declarative descriptors for every configuration entity. A descriptor carries
everything the generic CRUD service, the configuration screen and the HTTP
routes need to know about one entity: the model, its schemas, table columns,
form defaults, required fields and display labels.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from ..core.database import Base
from ..models import (
    AdvisorTeam, CallType, Campus, CommunicationTemplate, DocumentTemplate,
    LeadPriority, LeadRoutingRule, LeadStatus, MarketingSource,
    NotificationFilter, Program, Requirement, Team
)
from ..schemas.table import ColumnDescriptor
from ..schemas.program import ProgramCreate, ProgramUpdate, ProgramResponse
from ..schemas.campus import CampusCreate, CampusUpdate, CampusResponse
from ..schemas.call_type import CallTypeCreate, CallTypeUpdate, CallTypeResponse
from ..schemas.document_template import (
    DocumentTemplateCreate, DocumentTemplateUpdate, DocumentTemplateResponse
)
from ..schemas.lead_priority import (
    LeadPriorityCreate, LeadPriorityUpdate, LeadPriorityResponse
)
from ..schemas.lead_status import LeadStatusCreate, LeadStatusUpdate, LeadStatusResponse
from ..schemas.marketing_source import (
    MarketingSourceCreate, MarketingSourceUpdate, MarketingSourceResponse
)
from ..schemas.notification_filter import (
    NotificationFilterCreate, NotificationFilterUpdate, NotificationFilterResponse
)
from ..schemas.team import (
    TeamCreate, TeamUpdate, TeamResponse,
    AdvisorTeamCreate, AdvisorTeamUpdate, AdvisorTeamResponse
)
from ..schemas.communication_template import (
    CommunicationTemplateCreate, CommunicationTemplateUpdate,
    CommunicationTemplateResponse
)
from ..schemas.requirement import (
    RequirementCreate, RequirementUpdate, RequirementResponse
)
from ..schemas.routing_rule import (
    LeadRoutingRuleCreate, LeadRoutingRuleUpdate, LeadRoutingRuleResponse
)
from .communication_template_service import CommunicationTemplateService


def col(key: str, label: str, type: str = "text", sortable: bool = False,
        filterable: bool = False, width: Optional[str] = None) -> ColumnDescriptor:
    return ColumnDescriptor(key=key, label=label, type=type, sortable=sortable,
                            filterable=filterable, width=width)


@dataclass(frozen=True)
class EntityDescriptor:
    """How one configuration entity is stored, validated and displayed."""
    key: str
    slug: str
    label: str
    plural_label: str
    model: Type[Base]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    columns: Tuple[ColumnDescriptor, ...]
    defaults: Mapping[str, Any]
    required_fields: Tuple[Tuple[str, str], ...]
    table_title: str
    table_description: str
    order_by: Tuple[str, ...] = ("name",)
    title_field: str = "name"
    natural_key: Tuple[str, ...] = ("name",)
    # (payload, existing row or None) -> payload, applied after validation
    derive_fields: Optional[Callable[[Dict[str, Any], Any], Dict[str, Any]]] = None

    def form_defaults(self) -> Dict[str, Any]:
        """A fresh, independent copy of the form defaults."""
        return copy.deepcopy(dict(self.defaults))

    @property
    def search_placeholder(self) -> str:
        return f"Search {self.plural_label.lower()}..."

    @property
    def empty_message(self) -> str:
        return (f"No {self.plural_label.lower()} found. "
                f"Add your first {self.label.lower()} to get started.")


PROGRAM = EntityDescriptor(
    key="program",
    slug="programs",
    label="Program",
    plural_label="Programs",
    model=Program,
    create_schema=ProgramCreate,
    update_schema=ProgramUpdate,
    response_schema=ProgramResponse,
    columns=(
        col("name", "Program Name", sortable=True),
        col("code", "Code", sortable=True),
        col("type", "Type", "badge", filterable=True),
        col("duration", "Duration"),
        col("campus", "Campus", sortable=True),
        col("delivery_method", "Delivery", "badge", filterable=True),
        col("status", "Status", "badge", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "code": "", "description": "", "type": "undergraduate",
        "duration": "", "campus": "", "delivery_method": "on-campus",
        "status": "active", "color": "#3B82F6", "category": "", "tags": [],
        "is_active": True,
    },
    required_fields=(("name", "Name"), ("code", "Code")),
    table_title="Academic Programs",
    table_description="Manage academic programs offered by your institution",
    natural_key=("code",),
)

CAMPUS = EntityDescriptor(
    key="campus",
    slug="campuses",
    label="Campus",
    plural_label="Campuses",
    model=Campus,
    create_schema=CampusCreate,
    update_schema=CampusUpdate,
    response_schema=CampusResponse,
    columns=(
        col("name", "Campus Name", sortable=True),
        col("code", "Code", sortable=True),
        col("city", "City", sortable=True),
        col("country", "Country", sortable=True, filterable=True),
        col("capacity", "Capacity", "number", sortable=True),
        col("facilities", "Facilities", "array", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "code": "", "address": "", "city": "", "state": "",
        "country": "", "postal_code": "", "phone": "", "email": "",
        "website": "", "timezone": "UTC", "is_active": True, "capacity": 0,
        "facilities": [],
    },
    required_fields=(("name", "Campus name"),),
    table_title="Campuses",
    table_description="Configure campus locations and facilities",
)

CALL_TYPE = EntityDescriptor(
    key="call_type",
    slug="call-types",
    label="Call Type",
    plural_label="Call Types",
    model=CallType,
    create_schema=CallTypeCreate,
    update_schema=CallTypeUpdate,
    response_schema=CallTypeResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("category", "Category", "badge", sortable=True, filterable=True),
        col("default_duration_minutes", "Duration (min)", "number", sortable=True),
        col("color", "Color", "color"),
        col("requires_follow_up", "Follow-up", "boolean", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "description": "", "category": "",
        "default_duration_minutes": 15, "color": "#10B981",
        "requires_follow_up": False, "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Call Types",
    table_description="Configure call categories and templates",
)

DOCUMENT_TEMPLATE = EntityDescriptor(
    key="document_template",
    slug="document-templates",
    label="Document Template",
    plural_label="Document Templates",
    model=DocumentTemplate,
    create_schema=DocumentTemplateCreate,
    update_schema=DocumentTemplateUpdate,
    response_schema=DocumentTemplateResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("document_type", "Type", "badge", sortable=True, filterable=True),
        col("category", "Category", sortable=True),
        col("accepted_formats", "Formats", "array"),
        col("max_size_mb", "Max Size (MB)", "number", sortable=True),
        col("is_required", "Required", "boolean", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "description": "", "document_type": "other",
        "category": "", "is_required": False,
        "accepted_formats": ["pdf", "jpg", "png"], "max_size_mb": 10,
        "stages": [], "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Document Templates",
    table_description="Document requirements and templates",
)

LEAD_PRIORITY = EntityDescriptor(
    key="lead_priority",
    slug="lead-priorities",
    label="Lead Priority",
    plural_label="Lead Priorities",
    model=LeadPriority,
    create_schema=LeadPriorityCreate,
    update_schema=LeadPriorityUpdate,
    response_schema=LeadPriorityResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("level", "Level", "number", sortable=True),
        col("color", "Color", "color"),
        col("sla_hours", "SLA (hours)", "number", sortable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "level": 1, "color": "#EF4444", "sla_hours": 24,
        "description": "", "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Lead Priorities",
    table_description="Set up lead priority levels and SLAs",
    order_by=("level", "name"),
)

LEAD_STATUS = EntityDescriptor(
    key="lead_status",
    slug="lead-statuses",
    label="Lead Status",
    plural_label="Lead Statuses",
    model=LeadStatus,
    create_schema=LeadStatusCreate,
    update_schema=LeadStatusUpdate,
    response_schema=LeadStatusResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("color", "Color", "color"),
        col("order_index", "Order", "number", sortable=True),
        col("is_default", "Default", "boolean", filterable=True),
        col("is_final", "Final", "boolean", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "description": "", "color": "#6366F1", "order_index": 0,
        "is_default": False, "is_final": False, "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Lead Statuses",
    table_description="Configure lead status options",
    order_by=("order_index", "name"),
)

MARKETING_SOURCE = EntityDescriptor(
    key="marketing_source",
    slug="marketing-sources",
    label="Marketing Source",
    plural_label="Marketing Sources",
    model=MarketingSource,
    create_schema=MarketingSourceCreate,
    update_schema=MarketingSourceUpdate,
    response_schema=MarketingSourceResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("category", "Category", "badge", sortable=True, filterable=True),
        col("cost_per_lead", "Cost / Lead", "number", sortable=True),
        col("tracking_code", "Tracking Code"),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "category": "digital", "description": "",
        "cost_per_lead": None, "tracking_code": "", "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Marketing Sources",
    table_description="Track and manage lead sources",
)

NOTIFICATION_FILTER = EntityDescriptor(
    key="notification_filter",
    slug="notification-filters",
    label="Notification Filter",
    plural_label="Notification Filters",
    model=NotificationFilter,
    create_schema=NotificationFilterCreate,
    update_schema=NotificationFilterUpdate,
    response_schema=NotificationFilterResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("event_types", "Events", "array", filterable=True),
        col("channels", "Channels", "array", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
        col("updated_at", "Updated", "date", sortable=True),
    ),
    defaults={
        "name": "", "description": "", "event_types": [], "channels": ["in_app"],
        "conditions": [], "is_active": True,
    },
    required_fields=(("name", "Name"),),
    table_title="Notification Filters",
    table_description="Configure notification rules and filters",
)

TEAM = EntityDescriptor(
    key="team",
    slug="external-teams",
    label="Team",
    plural_label="Teams",
    model=Team,
    create_schema=TeamCreate,
    update_schema=TeamUpdate,
    response_schema=TeamResponse,
    columns=(
        col("name", "Team Name", sortable=True),
        col("team_type", "Type", "badge", filterable=True),
        col("region", "Region", sortable=True, filterable=True),
        col("contact_email", "Contact"),
        col("specializations", "Specializations", "array"),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "description": "", "team_type": "external", "region": "",
        "contact_email": "", "specializations": [], "is_active": True,
    },
    required_fields=(("name", "Team name"),),
    table_title="External Recruiters",
    table_description="Manage external recruiter teams",
)

ADVISOR_TEAM = EntityDescriptor(
    key="advisor_team",
    slug="internal-teams",
    label="Advisor Team",
    plural_label="Advisor Teams",
    model=AdvisorTeam,
    create_schema=AdvisorTeamCreate,
    update_schema=AdvisorTeamUpdate,
    response_schema=AdvisorTeamResponse,
    columns=(
        col("name", "Team Name", sortable=True),
        col("region", "Region", sortable=True, filterable=True),
        col("max_daily_assignments", "Daily Capacity", "number", sortable=True),
        col("specializations", "Specializations", "array", filterable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "description": "", "region": "",
        "max_daily_assignments": 30, "specializations": [], "is_active": True,
    },
    required_fields=(("name", "Team name"),),
    table_title="Internal Teams",
    table_description="Configure internal team assignments",
)

COMMUNICATION_TEMPLATE = EntityDescriptor(
    key="communication_template",
    slug="communication-templates",
    label="Communication Template",
    plural_label="Communication Templates",
    model=CommunicationTemplate,
    create_schema=CommunicationTemplateCreate,
    update_schema=CommunicationTemplateUpdate,
    response_schema=CommunicationTemplateResponse,
    columns=(
        col("name", "Name", sortable=True),
        col("type", "Type", "badge", sortable=True, filterable=True),
        col("subject", "Subject"),
        col("variables", "Variables", "array"),
        col("usage_count", "Uses", "number", sortable=True),
        col("is_active", "Active", "boolean", filterable=True),
    ),
    defaults={
        "name": "", "type": "email", "subject": "", "content": "",
        "variables": [], "is_active": True,
    },
    required_fields=(("name", "Name"), ("content", "Content")),
    table_title="Communication Templates",
    table_description="Email, SMS, and meeting templates",
    order_by=("type", "name"),
    natural_key=("name", "type"),
    derive_fields=CommunicationTemplateService.fill_variables,
)

REQUIREMENT = EntityDescriptor(
    key="requirement",
    slug="requirements",
    label="Requirement",
    plural_label="Requirements",
    model=Requirement,
    create_schema=RequirementCreate,
    update_schema=RequirementUpdate,
    response_schema=RequirementResponse,
    columns=(
        col("title", "Title", sortable=True),
        col("type", "Type", "badge", sortable=True, filterable=True),
        col("mandatory", "Mandatory", "boolean", filterable=True),
        col("minimum_grade", "Minimum Grade"),
        col("applicable_programs", "Programs", "array", filterable=True),
        col("category", "Category", sortable=True, filterable=True),
    ),
    defaults={
        "title": "", "description": "", "type": "academic", "mandatory": True,
        "details": "", "minimum_grade": "", "alternatives": [],
        "category": "Custom", "applicable_programs": ["All Programs"],
        "is_active": True,
    },
    required_fields=(("title", "Title"),),
    table_title="Requirements",
    table_description="Academic and entry requirements",
    order_by=("title",),
    title_field="title",
    natural_key=("title",),
)

ROUTING_RULE = EntityDescriptor(
    key="routing_rule",
    slug="lead-routing",
    label="Routing Rule",
    plural_label="Routing Rules",
    model=LeadRoutingRule,
    create_schema=LeadRoutingRuleCreate,
    update_schema=LeadRoutingRuleUpdate,
    response_schema=LeadRoutingRuleResponse,
    columns=(
        col("name", "Rule Name", sortable=True),
        col("priority", "Priority", "number", sortable=True),
        col("description", "Description"),
        col("is_active", "Active", "boolean", filterable=True),
        col("updated_at", "Updated", "date", sortable=True),
    ),
    defaults={
        "name": "", "description": "", "priority": 0, "conditions": [],
        "assignment_config": {"method": "round_robin"}, "is_active": True,
    },
    required_fields=(("name", "Rule name"),),
    table_title="Lead Routing Rules",
    table_description="Route incoming leads to advisors and teams",
    order_by=("priority", "name"),
)

ENTITY_DESCRIPTORS: Dict[str, EntityDescriptor] = {
    descriptor.key: descriptor
    for descriptor in (
        PROGRAM, CAMPUS, MARKETING_SOURCE, LEAD_STATUS, LEAD_PRIORITY,
        COMMUNICATION_TEMPLATE, DOCUMENT_TEMPLATE, CALL_TYPE,
        NOTIFICATION_FILTER, REQUIREMENT, ADVISOR_TEAM, TEAM, ROUTING_RULE,
    )
}


def get_descriptor(key: str) -> EntityDescriptor:
    """Look up a descriptor by entity key or URL slug."""
    if key in ENTITY_DESCRIPTORS:
        return ENTITY_DESCRIPTORS[key]
    for descriptor in ENTITY_DESCRIPTORS.values():
        if descriptor.slug == key:
            return descriptor
    raise ValueError(f"Unknown configuration entity: {key}")
