"""
Rule payload schemas.

Routing rules and notification filters persist their conditions and
assignment settings as JSON. These tagged unions give every known payload
shape a concrete type; ``custom`` variants carry an explicit key-value map for
shapes that have no dedicated model yet.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter, model_validator


class FieldEqualsCondition(BaseModel):
    type: Literal["field_equals"] = "field_equals"
    field: str = Field(..., min_length=1)
    value: Any


class FieldInCondition(BaseModel):
    type: Literal["field_in"] = "field_in"
    field: str = Field(..., min_length=1)
    values: List[Any] = Field(..., min_length=1)


class ScoreRangeCondition(BaseModel):
    type: Literal["score_range"] = "score_range"
    min_score: Optional[float] = None
    max_score: Optional[float] = None

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min_score is None and self.max_score is None:
            raise ValueError("score_range needs min_score or max_score")
        if (self.min_score is not None and self.max_score is not None
                and self.min_score > self.max_score):
            raise ValueError("min_score must not exceed max_score")
        return self


class CustomCondition(BaseModel):
    type: Literal["custom"] = "custom"
    params: Dict[str, Any] = Field(default_factory=dict)


RuleCondition = Annotated[
    Union[FieldEqualsCondition, FieldInCondition,
          ScoreRangeCondition, CustomCondition],
    Field(discriminator="type")
]


class RoundRobinAssignment(BaseModel):
    method: Literal["round_robin"] = "round_robin"
    team_id: Optional[str] = None


class DirectAssignment(BaseModel):
    method: Literal["direct"] = "direct"
    advisor_id: str = Field(..., min_length=1)


class TeamAssignment(BaseModel):
    method: Literal["team"] = "team"
    team_id: str = Field(..., min_length=1)


class CustomAssignment(BaseModel):
    method: Literal["custom"] = "custom"
    params: Dict[str, Any] = Field(default_factory=dict)


AssignmentConfig = Annotated[
    Union[RoundRobinAssignment, DirectAssignment,
          TeamAssignment, CustomAssignment],
    Field(discriminator="method")
]

_conditions_adapter = TypeAdapter(List[RuleCondition])
_assignment_adapter = TypeAdapter(AssignmentConfig)


def parse_conditions(raw: Any) -> List[BaseModel]:
    """Parse stored JSON into typed conditions."""
    return _conditions_adapter.validate_python(raw or [])


def parse_assignment(raw: Any) -> BaseModel:
    """Parse stored JSON into a typed assignment config."""
    return _assignment_adapter.validate_python(raw or {"method": "round_robin"})


def condition_matches(condition: BaseModel, lead: Dict[str, Any]) -> bool:
    """Evaluate a single condition against a lead's attributes."""
    if isinstance(condition, FieldEqualsCondition):
        return lead.get(condition.field) == condition.value
    if isinstance(condition, FieldInCondition):
        return lead.get(condition.field) in condition.values
    if isinstance(condition, ScoreRangeCondition):
        score = lead.get("lead_score")
        if score is None:
            return False
        try:
            score = float(score)
        except (TypeError, ValueError):
            return False
        if condition.min_score is not None and score < condition.min_score:
            return False
        if condition.max_score is not None and score > condition.max_score:
            return False
        return True
    # custom: every param must match the lead attribute of the same name
    return all(lead.get(key) == value for key, value in condition.params.items())
