from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from .table import ColumnDescriptor


class SectionResponse(BaseModel):
    id: str
    label: str
    description: str
    category: str
    entity: Optional[str] = None
    is_new: bool = False
    badge: Optional[str] = None

    model_config = {"from_attributes": True}


class SectionGroup(BaseModel):
    category: str
    sections: List[SectionResponse]


class SectionCatalogResponse(BaseModel):
    categories: List[str]
    groups: List[SectionGroup]
    total_count: int


class SectionDetailResponse(SectionResponse):
    placeholder: Optional[str] = None
    slug: Optional[str] = None
    title: Optional[str] = None
    table_description: Optional[str] = None
    search_placeholder: Optional[str] = None
    empty_message: Optional[str] = None
    columns: List[ColumnDescriptor] = []
    defaults: Dict[str, Any] = {}
    required_fields: List[str] = []


class ResolvedSectionResponse(BaseModel):
    path: Optional[str] = None
    section_id: str


class TemplatePreviewRequest(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)


class TemplatePreviewResponse(BaseModel):
    subject: str
    content: str
    variables: List[str]
    missing_variables: List[str]
