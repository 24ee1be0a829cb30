from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class PhotoUpsert(BaseModel):
    admission_photo: Optional[str] = None


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    admission_photo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AddressUpsert(BaseModel):
    street: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    complement: Optional[str] = None
    neighborhood: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = "BR"


class AddressResponse(AddressUpsert):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
