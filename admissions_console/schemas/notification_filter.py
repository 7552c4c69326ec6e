from pydantic import BaseModel, Field
from typing import List, Optional
from .common import RecordResponse
from .rules import RuleCondition


class NotificationFilterBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    event_types: List[str] = []
    channels: List[str] = []
    conditions: List[RuleCondition] = []
    is_active: bool = True


class NotificationFilterCreate(NotificationFilterBase):
    pass


class NotificationFilterUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_types: Optional[List[str]] = None
    channels: Optional[List[str]] = None
    conditions: Optional[List[RuleCondition]] = None
    is_active: Optional[bool] = None


class NotificationFilterResponse(RecordResponse, NotificationFilterBase):
    event_types: Optional[List[str]] = None
    channels: Optional[List[str]] = None
    conditions: Optional[List[RuleCondition]] = None
