from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import date, datetime
from app.models.document import DocumentStatus


class DocumentCreate(BaseModel):
    employee_id: int
    name: str = Field(..., min_length=3)
    type: str = Field(..., min_length=1)
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)
    expiration_date: Optional[date] = None
    notes: Optional[str] = None


class DocumentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3)
    type: Optional[str] = Field(None, min_length=1)
    expiration_date: Optional[date] = None
    notes: Optional[str] = None


class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: Optional[str] = None
    name: str
    type: str
    status: str
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    expiration_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
