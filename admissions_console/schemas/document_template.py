from pydantic import BaseModel, Field
from typing import List, Optional
from .common import RecordResponse


class DocumentTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    document_type: str = "other"
    category: Optional[str] = None
    is_required: bool = False
    accepted_formats: List[str] = []
    max_size_mb: int = Field(10, ge=1)
    stages: List[str] = []
    is_active: bool = True


class DocumentTemplateCreate(DocumentTemplateBase):
    pass


class DocumentTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    document_type: Optional[str] = None
    category: Optional[str] = None
    is_required: Optional[bool] = None
    accepted_formats: Optional[List[str]] = None
    max_size_mb: Optional[int] = Field(None, ge=1)
    stages: Optional[List[str]] = None
    is_active: Optional[bool] = None


class DocumentTemplateResponse(RecordResponse, DocumentTemplateBase):
    accepted_formats: Optional[List[str]] = None
    max_size_mb: Optional[int] = None
    stages: Optional[List[str]] = None
