"""
ShiftSync - Attendance Schemas
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.attendance import AttendanceStatus


class AttendanceMarkRequest(BaseModel):
    """
    Mark attendance for one employee and day.

    Omitted overtime_hours, attachment and note keep their stored values.
    """
    employee_id: UUID
    date: date
    status: AttendanceStatus
    overtime_hours: Optional[Decimal] = Field(None, ge=0)
    attachment: Optional[str] = None
    note: Optional[str] = None


class AttendanceResponse(BaseModel):
    id: UUID
    employee_id: UUID
    date: date
    status: AttendanceStatus
    hours_worked: Decimal
    overtime_hours: Decimal
    attachment: Optional[str] = None
    note: Optional[str] = None
    updated_by: Optional[str] = None
    check_in_time: Optional[datetime] = None

    class Config:
        from_attributes = True


class CopyDayRequest(BaseModel):
    source_date: date
    target_date: date


class CopyDayResponse(BaseModel):
    copied: int


class MonthGridResponse(BaseModel):
    """Month of attendance keyed by employee id, then ISO date."""
    year: int
    month: int
    start: date
    end: date
    records: Dict[str, Dict[str, AttendanceResponse]]


class AttendanceListResponse(BaseModel):
    records: List[AttendanceResponse]
    total: int
