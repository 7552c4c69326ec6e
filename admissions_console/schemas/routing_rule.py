from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
import uuid
from .common import RecordResponse
from .rules import AssignmentConfig, RoundRobinAssignment, RuleCondition


class LeadRoutingRuleBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    priority: int = 0
    conditions: List[RuleCondition] = []
    assignment_config: AssignmentConfig = Field(default_factory=RoundRobinAssignment)
    is_active: bool = True


class LeadRoutingRuleCreate(LeadRoutingRuleBase):
    pass


class LeadRoutingRuleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    priority: Optional[int] = None
    conditions: Optional[List[RuleCondition]] = None
    assignment_config: Optional[AssignmentConfig] = None
    is_active: Optional[bool] = None


class LeadRoutingRuleResponse(RecordResponse, LeadRoutingRuleBase):
    priority: Optional[int] = None
    conditions: Optional[List[RuleCondition]] = None

    @field_validator("assignment_config", mode="before")
    @classmethod
    def default_assignment(cls, value):
        return value or {"method": "round_robin"}


class RoutingMatchRequest(BaseModel):
    lead: Dict[str, Any]


class RoutingMatchResponse(BaseModel):
    matched: bool
    rule_id: Optional[uuid.UUID] = None
    rule_name: Optional[str] = None
    assignment_config: Optional[AssignmentConfig] = None
