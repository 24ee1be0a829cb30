from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import date, datetime
from app.models.employee_dependent import DependentGender, DependentRelationship


class DependentCreate(BaseModel):
    full_name: str = Field(..., min_length=3)
    cpf: Optional[str] = Field(None, min_length=11)
    birth_date: date
    relationship: DependentRelationship
    gender: DependentGender
    birth_certificate_number: Optional[str] = None
    has_disability: bool = False
    is_student: bool = False
    notes: Optional[str] = None


class DependentBatchCreate(BaseModel):
    dependents: List[DependentCreate] = Field(..., min_length=1)


class DependentUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=3)
    cpf: Optional[str] = Field(None, min_length=11)
    birth_date: Optional[date] = None
    relationship: Optional[DependentRelationship] = None
    gender: Optional[DependentGender] = None
    birth_certificate_number: Optional[str] = None
    has_disability: Optional[bool] = None
    is_student: Optional[bool] = None
    notes: Optional[str] = None


class DependentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    full_name: str
    cpf: Optional[str] = None
    birth_date: date
    relationship: str
    gender: str
    birth_certificate_number: Optional[str] = None
    has_disability: bool
    is_student: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
