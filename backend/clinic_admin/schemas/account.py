from pydantic import Field
from datetime import datetime
from typing import Optional
from clinic_admin.schemas.common import CamelModel, RequestModel, EMAIL_PATTERN


class DoctorCreate(RequestModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=200)
    specialty: str = Field(min_length=1, max_length=100)
    license_number: str = Field(min_length=1, max_length=50)
    phone_number: str = Field(min_length=1, max_length=20)
    password: str = Field(min_length=1)


class AdminCreate(RequestModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=200)
    password: str = Field(min_length=1)


class ProfileUpdate(RequestModel):
    # All three are required: the update overwrites them as a unit.
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=200)


class AdminResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdateResponse(CamelModel):
    message: str
    admin: AdminResponse
