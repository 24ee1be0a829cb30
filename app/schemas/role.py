from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
from app.models.role import ContractType, SkillLevel, WorkModel


def _normalize_level(value: Optional[str]) -> Optional[str]:
    # Forms submit "none" for "no level"; it is stored as null
    if value is None or value == "none":
        return None
    return SkillLevel(value).value


class CourseItem(BaseModel):
    name: str = Field(..., min_length=1)
    is_required: bool = False


class ComplementaryCourseItem(BaseModel):
    name: str = Field(..., min_length=1)


class SkillItem(BaseModel):
    name: str = Field(..., min_length=1)
    level: Optional[str] = None

    normalize_level = field_validator("level")(_normalize_level)


class LanguageItem(BaseModel):
    name: str = Field(..., min_length=1)
    level: Optional[str] = None
    is_required: bool = False

    normalize_level = field_validator("level")(_normalize_level)


class RolePayload(BaseModel):
    """Full Role payload. Every child list replaces the stored collection."""
    title: str = Field(..., min_length=1)
    contract_type: ContractType
    active: bool = True
    team_id: Optional[int] = None
    description: Optional[str] = None
    salary: Optional[float] = Field(None, gt=0)
    level: Optional[str] = None
    seniority_level: Optional[str] = None
    work_model: Optional[WorkModel] = None
    required_requirements: Optional[str] = None
    desired_requirements: Optional[str] = None

    courses: List[CourseItem] = []
    complementary_courses: List[ComplementaryCourseItem] = []
    technical_skills: List[SkillItem] = []
    behavioral_skills: List[SkillItem] = []
    languages: List[LanguageItem] = []


class RoleActiveUpdate(BaseModel):
    active: bool


class CourseResponse(CourseItem):
    model_config = ConfigDict(from_attributes=True)
    id: int


class ComplementaryCourseResponse(ComplementaryCourseItem):
    model_config = ConfigDict(from_attributes=True)
    id: int


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    level: Optional[str] = None


class LanguageResponse(SkillResponse):
    is_required: bool


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    title: str
    contract_type: str
    active: bool
    team_id: Optional[int] = None
    team_name: Optional[str] = None
    description: Optional[str] = None
    salary: Optional[float] = None
    level: Optional[str] = None
    seniority_level: Optional[str] = None
    work_model: Optional[str] = None
    required_requirements: Optional[str] = None
    desired_requirements: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RoleDetailResponse(RoleResponse):
    employees_count: int = 0
    courses: List[CourseResponse] = []
    complementary_courses: List[ComplementaryCourseResponse] = []
    technical_skills: List[SkillResponse] = []
    behavioral_skills: List[SkillResponse] = []
    languages: List[LanguageResponse] = []
