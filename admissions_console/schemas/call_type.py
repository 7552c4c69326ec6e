from pydantic import BaseModel, Field
from typing import Optional
from .common import RecordResponse, color_field


class CallTypeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    default_duration_minutes: int = Field(15, ge=0)
    color: Optional[str] = color_field("#10B981")
    requires_follow_up: bool = False
    is_active: bool = True


class CallTypeCreate(CallTypeBase):
    pass


class CallTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    default_duration_minutes: Optional[int] = Field(None, ge=0)
    color: Optional[str] = color_field(None)
    requires_follow_up: Optional[bool] = None
    is_active: Optional[bool] = None


class CallTypeResponse(RecordResponse, CallTypeBase):
    default_duration_minutes: Optional[int] = None
