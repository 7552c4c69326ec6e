from pydantic import BaseModel, Field
from typing import List, Optional
from .common import RecordResponse


class CampusBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    timezone: str = "UTC"
    capacity: int = Field(0, ge=0)
    facilities: List[str] = []
    is_active: bool = True


class CampusCreate(CampusBase):
    pass


class CampusUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    timezone: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    facilities: Optional[List[str]] = None
    is_active: Optional[bool] = None


class CampusResponse(RecordResponse, CampusBase):
    capacity: Optional[int] = None
    facilities: Optional[List[str]] = None
