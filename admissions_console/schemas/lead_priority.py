from pydantic import BaseModel, Field
from typing import Optional
from .common import RecordResponse, color_field


class LeadPriorityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: int = Field(1, ge=1)
    color: Optional[str] = color_field("#EF4444")
    sla_hours: int = Field(24, ge=0)
    description: Optional[str] = None
    is_active: bool = True


class LeadPriorityCreate(LeadPriorityBase):
    pass


class LeadPriorityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    level: Optional[int] = Field(None, ge=1)
    color: Optional[str] = color_field(None)
    sla_hours: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class LeadPriorityResponse(RecordResponse, LeadPriorityBase):
    level: Optional[int] = None
    sla_hours: Optional[int] = None
