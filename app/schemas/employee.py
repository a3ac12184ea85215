"""
ShiftSync - Employee Schemas

Pydantic schemas for the employee directory, offboarding and rehire.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.employee import EmployeeStatus, ExitType, StaffType, Team
from app.services.employee_service import DocumentKind, ExpiryStatus


# ===========================================
# DOCUMENTS
# ===========================================

class EmployeeDocuments(BaseModel):
    """Identity documents with expiry dates."""
    emirates_id: Optional[str] = None
    emirates_id_expiry: Optional[date] = None
    passport_number: Optional[str] = None
    passport_expiry: Optional[date] = None
    labour_card_number: Optional[str] = None
    labour_card_expiry: Optional[date] = None


class ExpiringDocumentResponse(BaseModel):
    employee_id: UUID
    employee_code: str
    employee_name: str
    document: DocumentKind
    number: Optional[str] = None
    expiry: Optional[str] = None
    status: ExpiryStatus

    class Config:
        from_attributes = True


# ===========================================
# EMPLOYEE
# ===========================================

class EmployeeBase(BaseModel):
    """Base employee fields."""
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    designation: str = ""
    department: str = ""
    company: str = ""
    joining_date: Optional[date] = None
    staff_type: StaffType = StaffType.WORKER
    team: Team = Team.INTERNAL
    work_location: str = ""

    # Salary structure
    basic: Decimal = Field(default=Decimal("0"), ge=0)
    housing: Decimal = Field(default=Decimal("0"), ge=0)
    transport: Decimal = Field(default=Decimal("0"), ge=0)
    other: Decimal = Field(default=Decimal("0"), ge=0)
    air_ticket: Decimal = Field(default=Decimal("0"), ge=0)
    leave_salary: Decimal = Field(default=Decimal("0"), ge=0)

    bank_name: Optional[str] = None
    iban: Optional[str] = None
    vacation_scheduled_date: Optional[date] = None


class EmployeeCreate(EmployeeBase):
    """Onboard employee request."""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    leave_balance: Optional[int] = Field(None, ge=0)
    documents: Optional[EmployeeDocuments] = None


class EmployeeUpdate(BaseModel):
    """Update employee request; only supplied fields change."""
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    designation: Optional[str] = None
    department: Optional[str] = None
    company: Optional[str] = None
    joining_date: Optional[date] = None
    staff_type: Optional[StaffType] = None
    team: Optional[Team] = None
    work_location: Optional[str] = None
    status: Optional[EmployeeStatus] = None
    leave_balance: Optional[int] = Field(None, ge=0)

    basic: Optional[Decimal] = Field(None, ge=0)
    housing: Optional[Decimal] = Field(None, ge=0)
    transport: Optional[Decimal] = Field(None, ge=0)
    other: Optional[Decimal] = Field(None, ge=0)
    air_ticket: Optional[Decimal] = Field(None, ge=0)
    leave_salary: Optional[Decimal] = Field(None, ge=0)

    bank_name: Optional[str] = None
    iban: Optional[str] = None
    documents: Optional[EmployeeDocuments] = None
    vacation_scheduled_date: Optional[date] = None


class EmployeeResponse(BaseModel):
    """Employee response."""
    id: UUID
    code: str
    name: str
    designation: str
    department: str
    company: str
    joining_date: date
    staff_type: StaffType
    team: Team
    work_location: str
    leave_balance: int
    status: EmployeeStatus
    active: bool

    basic: Optional[Decimal] = None
    housing: Optional[Decimal] = None
    transport: Optional[Decimal] = None
    other: Optional[Decimal] = None
    air_ticket: Optional[Decimal] = None
    leave_salary: Optional[Decimal] = None
    gross_salary: Decimal

    bank_name: Optional[str] = None
    iban: Optional[str] = None
    documents: Optional[Dict[str, Any]] = None
    vacation_scheduled_date: Optional[date] = None

    offboarding_details: Optional[Dict[str, Any]] = None
    rejoining_date: Optional[date] = None
    rejoining_reason: Optional[str] = None

    class Config:
        from_attributes = True


# ===========================================
# OFFBOARDING / REHIRE
# ===========================================

class OffboardingDocument(BaseModel):
    name: str
    data: str


class OffboardRequest(BaseModel):
    """Exit details; net_settlement is derived server-side."""
    exit_type: ExitType = ExitType.RESIGNATION
    exit_date: date = Field(default_factory=date.today)
    reason: str = ""
    gratuity: Decimal = Field(default=Decimal("0"), ge=0)
    leave_encashment: Decimal = Field(default=Decimal("0"), ge=0)
    salary_dues: Decimal = Field(default=Decimal("0"), ge=0)
    other_dues: Decimal = Field(default=Decimal("0"), ge=0)
    deductions: Decimal = Field(default=Decimal("0"), ge=0)
    assets_returned: bool = False
    notes: str = ""
    documents: List[OffboardingDocument] = Field(default_factory=list)


class RehireRequest(BaseModel):
    rejoining_date: date
    reason: str = ""


# ===========================================
# IMPORT
# ===========================================

class ImportRequest(BaseModel):
    """Raw CSV text, header row included."""
    csv_text: str

    @field_validator("csv_text")
    @classmethod
    def strip_bom(cls, v: str) -> str:
        return v.lstrip("\ufeff")


class ImportResponse(BaseModel):
    success: int
    errors: List[str]
