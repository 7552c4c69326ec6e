from pydantic import BaseModel, Field
from typing import Optional
from .common import RecordResponse, color_field


class LeadStatusBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = color_field("#6366F1")
    order_index: int = 0
    is_default: bool = False
    is_final: bool = False
    is_active: bool = True


class LeadStatusCreate(LeadStatusBase):
    pass


class LeadStatusUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = color_field(None)
    order_index: Optional[int] = None
    is_default: Optional[bool] = None
    is_final: Optional[bool] = None
    is_active: Optional[bool] = None


class LeadStatusResponse(RecordResponse, LeadStatusBase):
    order_index: Optional[int] = None
