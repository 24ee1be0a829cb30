from pydantic import BaseModel, ConfigDict, model_validator
from datetime import date, datetime
from typing import Optional


class EmployeeRoleCreate(BaseModel):
    role_id: int
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = True
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class EmployeeRoleUpdate(BaseModel):
    role_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None
    notes: Optional[str] = None


class EmployeeRoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: Optional[str] = None
    role_id: int
    role_title: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
