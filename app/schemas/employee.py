from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional
from datetime import date, datetime
from app.models.employee import EmployeeStatus


class EmployeeCreate(BaseModel):
    """Admin invite. The employee is linked to a credential when they register."""
    full_name: str = Field(..., min_length=3)
    email: EmailStr
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    is_admin: bool = False
    user_id: Optional[str] = None


class EmployeeUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=3)
    email: Optional[EmailStr] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    is_admin: Optional[bool] = None


class EmployeeStatusUpdate(BaseModel):
    status: EmployeeStatus


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    user_id: Optional[str] = None
    full_name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    is_admin: bool
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TenantContextResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_id: int
    employee_id: int
    is_admin: bool
