from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def color_field(default: str):
    return Field(default, pattern=HEX_COLOR_PATTERN)


class RecordResponse(BaseModel):
    """Fields every configuration record returns."""
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
