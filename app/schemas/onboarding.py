from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import date, datetime
from app.core.config import settings
from app.models.onboarding_task import OnboardingTaskCategory
from app.models.employee_onboarding import OnboardingStatus


class OnboardingTaskCreate(BaseModel):
    name: str = Field(..., min_length=3)
    description: Optional[str] = None
    category: OnboardingTaskCategory = OnboardingTaskCategory.other
    is_required: bool = True
    default_due_days: int = Field(settings.default_onboarding_due_days, ge=1)


class OnboardingTaskUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = None
    category: Optional[OnboardingTaskCategory] = None
    is_required: Optional[bool] = None
    default_due_days: Optional[int] = Field(None, ge=1)


class OnboardingTaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    name: str
    description: Optional[str] = None
    category: str
    is_required: bool
    default_due_days: int
    created_at: Optional[datetime] = None


class OnboardingAssign(BaseModel):
    employee_id: int
    task_ids: List[int] = Field(..., min_length=1)
    notes: Optional[str] = None
    due_date: Optional[date] = None


class OnboardingStatusUpdate(BaseModel):
    """Partial update: a notes-only body leaves status and derived fields alone."""
    status: Optional[OnboardingStatus] = None
    completed_by: Optional[int] = None
    notes: Optional[str] = None


class EmployeeOnboardingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: Optional[str] = None
    task_id: int
    task_name: Optional[str] = None
    task_category: Optional[str] = None
    status: str
    due_date: Optional[date] = None
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    completed_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
