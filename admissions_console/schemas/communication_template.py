from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from .common import RecordResponse

TemplateType = Literal["email", "sms", "meeting"]


class CommunicationTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: TemplateType = "email"
    subject: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., min_length=1)
    variables: List[str] = []
    is_active: bool = True


class CommunicationTemplateCreate(CommunicationTemplateBase):
    pass


class CommunicationTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[TemplateType] = None
    subject: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    variables: Optional[List[str]] = None
    is_active: Optional[bool] = None


class CommunicationTemplateResponse(RecordResponse, CommunicationTemplateBase):
    variables: Optional[List[str]] = None
    usage_count: Optional[int] = 0
