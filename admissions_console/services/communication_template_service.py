import logging
import re
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.communication_template import CommunicationTemplate

logger = logging.getLogger(__name__)

# Pattern to match {{variable_name}}
MERGE_FIELD_PATTERN = r'\{\{([^}]+)\}\}'


class CommunicationTemplateService:
    """Merge-field helpers for communication templates."""

    @staticmethod
    def extract_variables(*texts: Optional[str]) -> List[str]:
        """Unique variable names used in the given texts, in first-seen order"""
        variables: List[str] = []
        for text in texts:
            for name in re.findall(MERGE_FIELD_PATTERN, text or ""):
                name = name.strip()
                if name and name not in variables:
                    variables.append(name)
        return variables

    @staticmethod
    def replace_variables(text: Optional[str], data: Dict[str, Any]) -> str:
        """Replace variables in text with values; unknown variables stay as written"""
        def replace_field(match):
            name = match.group(1).strip()
            if name in data and data[name] is not None:
                return str(data[name])
            return match.group(0)

        return re.sub(MERGE_FIELD_PATTERN, replace_field, text or "")

    @staticmethod
    def fill_variables(payload: Dict[str, Any], record: Any = None) -> Dict[str, Any]:
        """
        Derive ``variables`` from subject and content when none were sent.

        On update (``record`` given) the list is only rebuilt when the
        subject or content changes, using stored values for the other one.
        """
        if payload.get("variables"):
            return payload
        if record is not None and not {"variables", "subject", "content"} & payload.keys():
            return payload
        subject = payload.get("subject", getattr(record, "subject", None))
        content = payload.get("content", getattr(record, "content", None))
        payload["variables"] = CommunicationTemplateService.extract_variables(subject, content)
        return payload

    @staticmethod
    def preview(db: Session, template_id: UUID, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Render a template with sample data.

        Raises:
            NotFoundError: If the template does not exist
        """
        template = db.query(CommunicationTemplate).filter(
            CommunicationTemplate.id == template_id
        ).first()
        if template is None:
            raise NotFoundError("Communication template not found")

        variables = CommunicationTemplateService.extract_variables(
            template.subject, template.content)
        return {
            "subject": CommunicationTemplateService.replace_variables(template.subject, data),
            "content": CommunicationTemplateService.replace_variables(template.content, data),
            "variables": variables,
            "missing_variables": [name for name in variables if data.get(name) is None],
        }

    @staticmethod
    def increment_usage_count(db: Session, template_id: UUID) -> int:
        """Increment the usage count for a template"""
        template = db.query(CommunicationTemplate).filter(
            CommunicationTemplate.id == template_id
        ).first()
        if template is None:
            raise NotFoundError("Communication template not found")
        try:
            template.usage_count = (template.usage_count or 0) + 1
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info(f"Template {template_id} used {template.usage_count} times")
        return template.usage_count
