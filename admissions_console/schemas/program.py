from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from .common import RecordResponse, color_field


class ProgramBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    type: str = "undergraduate"
    duration: Optional[str] = None
    campus: Optional[str] = None
    delivery_method: str = "on-campus"
    status: str = "active"
    color: Optional[str] = color_field("#3B82F6")
    category: Optional[str] = None
    tags: List[str] = []
    entry_requirements: List[Any] = []
    document_requirements: List[Any] = []
    fee_structure: Dict[str, Any] = {}
    is_active: bool = True


class ProgramCreate(ProgramBase):
    pass


class ProgramUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    type: Optional[str] = None
    duration: Optional[str] = None
    campus: Optional[str] = None
    delivery_method: Optional[str] = None
    status: Optional[str] = None
    color: Optional[str] = color_field(None)
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    entry_requirements: Optional[List[Any]] = None
    document_requirements: Optional[List[Any]] = None
    fee_structure: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None


class ProgramResponse(RecordResponse, ProgramBase):
    tags: Optional[List[str]] = None
    entry_requirements: Optional[List[Any]] = None
    document_requirements: Optional[List[Any]] = None
    fee_structure: Optional[Dict[str, Any]] = None
