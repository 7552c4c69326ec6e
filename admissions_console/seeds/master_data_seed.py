"""
Master Data Seeder

Default lead statuses, lead priorities and communication templates for a
fresh installation. Records are upserted by their natural key, so running the
seeder again refreshes the defaults instead of duplicating them.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from ..models.user import UserProfile
from ..services.crud_service import ConfigEntityService
from ..services.entity_registry import (
    COMMUNICATION_TEMPLATE,
    LEAD_PRIORITY,
    LEAD_STATUS,
    EntityDescriptor
)

logger = logging.getLogger(__name__)

SYSTEM_USER_EMAIL = "system@admissions.local"


def get_default_lead_statuses() -> List[Dict[str, Any]]:
    return [
        {"name": "New", "description": "Lead has just been captured",
         "color": "#3B82F6", "order_index": 0, "is_default": True},
        {"name": "Contacted", "description": "First contact made",
         "color": "#6366F1", "order_index": 1},
        {"name": "Qualified", "description": "Lead meets entry criteria",
         "color": "#10B981", "order_index": 2},
        {"name": "Application Started", "description": "Applicant has started an application",
         "color": "#F59E0B", "order_index": 3},
        {"name": "Converted", "description": "Lead became an applicant",
         "color": "#22C55E", "order_index": 4, "is_final": True},
        {"name": "Lost", "description": "Lead is no longer pursuing admission",
         "color": "#EF4444", "order_index": 5, "is_final": True},
    ]


def get_default_lead_priorities() -> List[Dict[str, Any]]:
    return [
        {"name": "Urgent", "level": 1, "color": "#DC2626", "sla_hours": 2,
         "description": "Respond within two hours"},
        {"name": "High", "level": 2, "color": "#F97316", "sla_hours": 8,
         "description": "Respond the same working day"},
        {"name": "Medium", "level": 3, "color": "#EAB308", "sla_hours": 24,
         "description": "Respond within one day"},
        {"name": "Low", "level": 4, "color": "#6B7280", "sla_hours": 72,
         "description": "Respond within three days"},
    ]


def get_default_communication_templates() -> List[Dict[str, Any]]:
    return [
        {"name": "Welcome Email", "type": "email",
         "subject": "Welcome to {{institution_name}}, {{first_name}}",
         "content": "Hi {{first_name}},\n\nThank you for your interest in "
                    "{{program_name}}. Your advisor {{advisor_name}} will be in "
                    "touch shortly.",
         "variables": ["institution_name", "first_name", "program_name", "advisor_name"]},
        {"name": "Application Reminder", "type": "sms",
         "content": "Hi {{first_name}}, your application for {{program_name}} "
                    "is waiting to be completed.",
         "variables": ["first_name", "program_name"]},
        {"name": "Advising Appointment", "type": "meeting",
         "subject": "Advising session with {{advisor_name}}",
         "content": "Meeting to discuss {{program_name}} entry requirements "
                    "and next steps.",
         "variables": ["advisor_name", "program_name"]},
    ]


SEED_DATA = (
    (LEAD_STATUS, get_default_lead_statuses),
    (LEAD_PRIORITY, get_default_lead_priorities),
    (COMMUNICATION_TEMPLATE, get_default_communication_templates),
)


def get_or_create_system_user(db: Session) -> UserProfile:
    """The admin account that owns seeded records."""
    user = db.query(UserProfile).filter(UserProfile.email == SYSTEM_USER_EMAIL).first()
    if user is None:
        user = UserProfile(email=SYSTEM_USER_EMAIL, first_name="System",
                           last_name="Administrator", role="admin")
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created system user {SYSTEM_USER_EMAIL}")
    return user


def seed_entity(db: Session, descriptor: EntityDescriptor,
                records: List[Dict[str, Any]], user: UserProfile) -> int:
    service = ConfigEntityService(descriptor, db)
    for record in records:
        data = descriptor.form_defaults()
        data.update(record)
        service.upsert_record(data, user)
    logger.info(f"Seeded {len(records)} {descriptor.plural_label.lower()}")
    return len(records)


def seed_master_data(db: Session) -> Dict[str, int]:
    """Upsert every default record; returns counts per entity key."""
    user = get_or_create_system_user(db)
    return {
        descriptor.key: seed_entity(db, descriptor, build(), user)
        for descriptor, build in SEED_DATA
    }
