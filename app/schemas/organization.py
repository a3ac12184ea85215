"""
ShiftSync - Organization Settings Schemas

Holidays, companies and the About page.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class HolidayCreate(BaseModel):
    date: date
    name: str = Field(..., min_length=1, max_length=200)


class HolidayResponse(BaseModel):
    id: UUID
    date: date
    name: str

    class Config:
        from_attributes = True


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CompanyRename(BaseModel):
    new_name: str = Field(..., min_length=1, max_length=255)
    cascade: bool = Field(False, description="Also rewrite the company on employee records")


class CompanyListResponse(BaseModel):
    companies: List[str]


class AboutProfileSchema(BaseModel):
    name: str = ""
    title: str = ""
    bio: str = ""
    profile_image: Optional[str] = None
    email: str = ""
    contact_info: str = ""


class AboutProfileUpdate(BaseModel):
    name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    email: Optional[str] = None
    contact_info: Optional[str] = None
