from pydantic import BaseModel, Field
from typing import List, Optional
from .common import RecordResponse


class TeamBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    team_type: str = "external"
    region: Optional[str] = None
    contact_email: Optional[str] = None
    specializations: List[str] = []
    is_active: bool = True


class TeamCreate(TeamBase):
    pass


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    team_type: Optional[str] = None
    region: Optional[str] = None
    contact_email: Optional[str] = None
    specializations: Optional[List[str]] = None
    is_active: Optional[bool] = None


class TeamResponse(RecordResponse, TeamBase):
    specializations: Optional[List[str]] = None


class AdvisorTeamBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    region: Optional[str] = None
    max_daily_assignments: int = Field(30, ge=0)
    specializations: List[str] = []
    is_active: bool = True


class AdvisorTeamCreate(AdvisorTeamBase):
    pass


class AdvisorTeamUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    region: Optional[str] = None
    max_daily_assignments: Optional[int] = Field(None, ge=0)
    specializations: Optional[List[str]] = None
    is_active: Optional[bool] = None


class AdvisorTeamResponse(RecordResponse, AdvisorTeamBase):
    max_daily_assignments: Optional[int] = None
    specializations: Optional[List[str]] = None
