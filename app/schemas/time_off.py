from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date, datetime
from typing import Optional
from app.models.time_off import TimeOffStatus, TimeOffType

class TimeOffCreate(BaseModel):
    employee_id: int
    type: TimeOffType
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=3)
    total_days: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self

class TimeOffStatusUpdate(BaseModel):
    status: TimeOffStatus

class TimeOffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: Optional[str] = None
    type: str
    status: str
    start_date: date
    end_date: date
    total_days: float
    reason: Optional[str] = None
    approved_by: Optional[int] = None
    approver_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
