from pydantic import BaseModel, Field
from typing import Optional
from .common import RecordResponse


class MarketingSourceBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = "digital"
    description: Optional[str] = None
    cost_per_lead: Optional[float] = Field(None, ge=0)
    tracking_code: Optional[str] = None
    is_active: bool = True


class MarketingSourceCreate(MarketingSourceBase):
    pass


class MarketingSourceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    description: Optional[str] = None
    cost_per_lead: Optional[float] = Field(None, ge=0)
    tracking_code: Optional[str] = None
    is_active: Optional[bool] = None


class MarketingSourceResponse(RecordResponse, MarketingSourceBase):
    pass
