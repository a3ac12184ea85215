"""
ShiftSync - Payroll Schemas

Pydantic schemas for payslips, payroll summaries and deductions.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.payroll import DeductionType


# ===========================================
# DEDUCTIONS
# ===========================================

class DeductionCreate(BaseModel):
    """Record a variable deduction."""
    employee_id: UUID
    date: date
    deduction_type: DeductionType
    amount: Decimal = Field(..., gt=0)
    note: Optional[str] = None


class DeductionResponse(BaseModel):
    id: UUID
    employee_id: UUID
    date: date
    deduction_type: DeductionType
    amount: Decimal
    note: Optional[str] = None
    updated_by: Optional[str] = None

    class Config:
        from_attributes = True


# ===========================================
# PAYSLIPS
# ===========================================

class PayslipResponse(BaseModel):
    """Monthly payslip for one employee."""
    employee_id: Optional[UUID] = None
    employee_code: str
    employee_name: str
    company: str
    team: str
    year: int
    month: int

    # Earnings
    basic: Decimal
    housing: Decimal
    transport: Decimal
    other: Decimal
    air_ticket: Decimal
    leave_salary: Decimal
    gross: Decimal

    # Days
    calendar_days: int
    unpaid_days: int
    paid_days: int

    # Deductions
    prorated_deduction: Decimal
    variable_deductions: Decimal
    total_deductions: Decimal

    # Additions
    overtime_pay: Decimal
    holiday_pay: Decimal
    week_off_pay: Decimal
    total_additions: Decimal
    total_overtime_hours: Decimal

    net: Decimal
    leave_balance: int

    class Config:
        from_attributes = True


class PayrollTotalsResponse(BaseModel):
    basic: Decimal
    housing: Decimal
    transport: Decimal
    air_ticket: Decimal
    leave_salary: Decimal
    other: Decimal
    gross: Decimal
    deductions: Decimal
    additions: Decimal
    net: Decimal
    employee_count: int

    class Config:
        from_attributes = True


class PayrollSummaryResponse(BaseModel):
    year: int
    month: int
    payslips: List[PayslipResponse]
    totals: PayrollTotalsResponse

    class Config:
        from_attributes = True
