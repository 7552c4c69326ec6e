"""
Lead routing evaluation.

Active routing rules are tried in ascending priority; the first rule whose
conditions all hold for the lead decides the assignment. A rule without
conditions matches every lead.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..models.routing_rule import LeadRoutingRule
from ..schemas.routing_rule import RoutingMatchResponse
from ..schemas.rules import condition_matches, parse_assignment, parse_conditions

logger = logging.getLogger(__name__)


def active_rules(db: Session) -> List[LeadRoutingRule]:
    return (
        db.query(LeadRoutingRule)
        .filter(LeadRoutingRule.is_active.is_(True))
        .order_by(LeadRoutingRule.priority.asc(), LeadRoutingRule.name.asc())
        .all()
    )


def rule_matches(rule: LeadRoutingRule, lead: Dict[str, Any]) -> bool:
    try:
        conditions = parse_conditions(rule.conditions)
    except ValidationError as e:
        logger.warning(f"Skipping routing rule {rule.id} with invalid conditions: {str(e)}")
        return False
    return all(condition_matches(condition, lead) for condition in conditions)


def find_matching_rule(db: Session, lead: Dict[str, Any]) -> Optional[LeadRoutingRule]:
    for rule in active_rules(db):
        if rule_matches(rule, lead):
            return rule
    return None


def route_lead(db: Session, lead: Dict[str, Any]) -> RoutingMatchResponse:
    """Describe which rule, if any, a lead would be routed by."""
    rule = find_matching_rule(db, lead)
    if rule is None:
        logger.info("No routing rule matched lead")
        return RoutingMatchResponse(matched=False)
    return RoutingMatchResponse(
        matched=True,
        rule_id=rule.id,
        rule_name=rule.name,
        assignment_config=parse_assignment(rule.assignment_config),
    )
