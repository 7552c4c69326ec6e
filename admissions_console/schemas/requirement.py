from pydantic import BaseModel, Field
from typing import List, Optional
from .common import RecordResponse


class RequirementBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = "academic"
    mandatory: bool = True
    details: Optional[str] = None
    minimum_grade: Optional[str] = None
    alternatives: List[str] = []
    category: str = "Custom"
    applicable_programs: List[str] = ["All Programs"]
    is_active: bool = True


class RequirementCreate(RequirementBase):
    pass


class RequirementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = None
    mandatory: Optional[bool] = None
    details: Optional[str] = None
    minimum_grade: Optional[str] = None
    alternatives: Optional[List[str]] = None
    category: Optional[str] = None
    applicable_programs: Optional[List[str]] = None
    is_active: Optional[bool] = None


class RequirementResponse(RecordResponse, RequirementBase):
    alternatives: Optional[List[str]] = None
    applicable_programs: Optional[List[str]] = None
