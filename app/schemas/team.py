from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime


class TeamBase(BaseModel):
    """Base schema for team data."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    manager_id: Optional[int] = None


class TeamCreate(TeamBase):
    """Schema for creating a new team."""
    pass


class TeamUpdate(BaseModel):
    """Schema for updating a team."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    manager_id: Optional[int] = None


class SubteamCreate(TeamBase):
    pass


class SubteamUpdate(TeamUpdate):
    pass


class MemberAdd(BaseModel):
    employee_id: int


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: int
    full_name: Optional[str] = None
    email: Optional[str] = None
    joined_at: Optional[datetime] = None


class SubteamResponse(TeamBase):
    """Schema for subteam response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    created_at: Optional[datetime] = None
    members_count: int = 0


class TeamResponse(TeamBase):
    """Schema for team response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    members_count: int = 0


class TeamDetailResponse(TeamResponse):
    members: List[MemberResponse] = []
    subteams: List[SubteamResponse] = []
