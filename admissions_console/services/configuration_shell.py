"""
Configuration Shell

Catalog of every configuration section, grouped by category, with a
free-text/category filter and the single active screen.

Key Features:
- Static section registry shared by the shell and the HTTP catalog
- Case-insensitive search over section label and description
- Initial section resolved from the request path
- Exactly one mounted screen at a time
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.auth import IdentityProvider, StaticIdentity
from ..core.config import settings
from ..core.exceptions import NotFoundError
from ..core.notifications import CollectingNotifier, LoggingNotifier, Notifier
from .configuration_screen import ConfigurationScreen
from .entity_registry import EntityDescriptor, get_descriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationSection:
    id: str
    label: str
    description: str
    category: str
    entity: Optional[str] = None
    placeholder: Optional[str] = None
    is_new: bool = False
    badge: Optional[str] = None

    @property
    def descriptor(self) -> Optional[EntityDescriptor]:
        return get_descriptor(self.entity) if self.entity else None


CONFIGURATION_SECTIONS: Tuple[ConfigurationSection, ...] = (
    # Data & Database
    ConfigurationSection(
        "stages", "Stages & Substages",
        "Configure lead, applicant, and student stages with substages",
        "Data & Database",
        placeholder="Stage configuration is managed in the pipeline planner."),
    ConfigurationSection(
        "custom-fields", "Custom Fields",
        "Manage custom fields for each stage",
        "Data & Database",
        placeholder="Custom fields configuration coming soon..."),
    ConfigurationSection(
        "programs", "Programs",
        "Manage academic programs and their configurations",
        "Data & Database", entity="program", is_new=True),
    ConfigurationSection(
        "campuses", "Campuses",
        "Configure campus locations and facilities",
        "Data & Database", entity="campus", is_new=True),
    ConfigurationSection(
        "marketing-sources", "Marketing Sources",
        "Track and manage lead sources",
        "Data & Database", entity="marketing_source", is_new=True),
    ConfigurationSection(
        "lead-statuses", "Lead Statuses",
        "Configure lead status options",
        "Data & Database", entity="lead_status", is_new=True),
    ConfigurationSection(
        "lead-priorities", "Lead Priorities",
        "Set up lead priority levels and SLAs",
        "Data & Database", entity="lead_priority", is_new=True),

    # Communication
    ConfigurationSection(
        "communication-templates", "Communication Templates",
        "Email, SMS, and meeting templates",
        "Communication", entity="communication_template", is_new=True),
    ConfigurationSection(
        "document-templates", "Document Templates",
        "Document requirements and templates",
        "Communication", entity="document_template", is_new=True),
    ConfigurationSection(
        "call-types", "Call Types",
        "Configure call categories and templates",
        "Communication", entity="call_type", is_new=True),
    ConfigurationSection(
        "notification-filters", "Notification Filters",
        "Configure notification rules and filters",
        "Communication", entity="notification_filter", is_new=True),
    ConfigurationSection(
        "requirements", "Requirements",
        "Academic and entry requirements",
        "Communication", entity="requirement", is_new=True),

    # Team Management
    ConfigurationSection(
        "internal-teams", "Internal Teams",
        "Configure internal team assignments",
        "Team Management", entity="advisor_team"),
    ConfigurationSection(
        "external-teams", "External Recruiters",
        "Manage external recruiter teams",
        "Team Management", entity="team", is_new=True),

    # Process Management
    ConfigurationSection(
        "lead-routing", "Lead Routing",
        "Route incoming leads to advisors and teams",
        "Process Management", entity="routing_rule"),
    ConfigurationSection(
        "workflows", "Workflow Rules",
        "Set up automated stage transitions and rules",
        "Process Management",
        placeholder="Workflow configuration coming soon...", badge="Soon"),
    ConfigurationSection(
        "campaigns", "Campaigns",
        "Marketing campaign configurations",
        "Process Management",
        placeholder="Campaign configuration coming soon...", badge="Soon"),
    ConfigurationSection(
        "events", "Events",
        "Event types and templates",
        "Process Management",
        placeholder="Event configuration coming soon...", badge="Soon"),

    # Integration
    ConfigurationSection(
        "intake-dates", "Intake Dates",
        "Program intake scheduling",
        "Integration",
        placeholder="Intake dates configuration coming soon...", badge="Soon"),
    ConfigurationSection(
        "payment-forms", "Payment Forms",
        "Payment form configurations",
        "Integration",
        placeholder="Payment forms configuration coming soon...", badge="Soon"),
    ConfigurationSection(
        "automation", "Automation",
        "Automated processes and triggers",
        "Integration",
        placeholder="Automation configuration coming soon...", badge="Soon"),
)


def get_section(section_id: str) -> ConfigurationSection:
    """
    Look up a section by id.

    Raises:
        NotFoundError: If no section has this id
    """
    for section in CONFIGURATION_SECTIONS:
        if section.id == section_id:
            return section
    raise NotFoundError(f"Configuration section '{section_id}' not found")


def section_categories() -> List[str]:
    """Unique categories in registry order."""
    categories: List[str] = []
    for section in CONFIGURATION_SECTIONS:
        if section.category not in categories:
            categories.append(section.category)
    return categories


def filter_sections(search: str = "", category: Optional[str] = None) -> List[ConfigurationSection]:
    term = (search or "").strip().lower()
    return [
        section for section in CONFIGURATION_SECTIONS
        if (not term or term in section.label.lower() or term in section.description.lower())
        and (not category or section.category == category)
    ]


def group_sections(sections: List[ConfigurationSection]) -> Dict[str, List[ConfigurationSection]]:
    """Group sections by category; categories without sections are omitted."""
    grouped: Dict[str, List[ConfigurationSection]] = {}
    for category in section_categories():
        members = [section for section in sections if section.category == category]
        if members:
            grouped[category] = members
    return grouped


def resolve_initial_section(pathname: Optional[str]) -> str:
    """
    Pick the section named by a URL path.

    The configured base path is stripped first; the section whose id is the
    longest prefix of the remainder wins. Anything else falls back to the
    default section.
    """
    default = settings.DEFAULT_CONFIGURATION_SECTION
    if not pathname:
        return default

    base = settings.CONFIGURATION_BASE_PATH.rstrip("/")
    path = pathname.split("?", 1)[0].rstrip("/")
    if base and path.startswith(base):
        path = path[len(base):]
    remainder = path.lstrip("/")
    if not remainder:
        return default

    best: Optional[str] = None
    for section in CONFIGURATION_SECTIONS:
        if remainder == section.id or remainder.startswith(section.id + "/"):
            if best is None or len(section.id) > len(best):
                best = section.id
    return best or default


class ConfigurationShell:
    """
    Section navigator owning the one active configuration screen.
    """

    def __init__(
        self,
        db: Session,
        notifier: Optional[Notifier] = None,
        identity: Optional[IdentityProvider] = None,
        pathname: Optional[str] = None
    ):
        self.db = db
        # without a notifier, outcomes are kept and written to the log
        if notifier is None:
            notifier = CollectingNotifier(forward=LoggingNotifier())
        self.notifier = notifier
        self.identity = identity if identity is not None else StaticIdentity()
        self.search = ""
        self.selected_category: Optional[str] = None
        self.active_section_id = resolve_initial_section(pathname)
        self.active_screen: Optional[ConfigurationScreen] = None

    @property
    def active_section(self) -> ConfigurationSection:
        return get_section(self.active_section_id)

    def categories(self) -> List[str]:
        return section_categories()

    def set_search(self, term: Optional[str]) -> None:
        self.search = term or ""

    def select_category(self, category: Optional[str]) -> None:
        self.selected_category = category

    def filtered_sections(self) -> List[ConfigurationSection]:
        return filter_sections(self.search, self.selected_category)

    def grouped_sections(self) -> Dict[str, List[ConfigurationSection]]:
        return group_sections(self.filtered_sections())

    def select(self, section_id: str) -> Optional[ConfigurationScreen]:
        """
        Activate a section and mount its screen.

        Placeholder sections have no screen; the previous screen is dropped
        either way.
        """
        section = get_section(section_id)
        self.active_section_id = section.id
        self.active_screen = None

        descriptor = section.descriptor
        if descriptor is None:
            logger.debug(f"Section {section.id} has no screen")
            return None

        self.active_screen = ConfigurationScreen(descriptor, self.db, self.notifier, self.identity)
        self.active_screen.mount()
        return self.active_screen

    def open(self) -> Optional[ConfigurationScreen]:
        """Mount the section resolved at construction."""
        return self.select(self.active_section_id)
