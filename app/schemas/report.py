"""
ShiftSync - Report Schemas
"""

from datetime import date
from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    day: date
    active_staff: int
    present: int
    on_leave: int
    absent: int

    class Config:
        from_attributes = True


class ReportRowResponse(BaseModel):
    employee_id: UUID
    code: str
    name: str
    company: str
    team: str
    present: int
    absent: int
    leave: int
    ot_hours: Decimal
    paid_days: int
    estimated_cost: Decimal

    class Config:
        from_attributes = True


class AttendanceReportResponse(BaseModel):
    start: date
    end: date
    rows: List[ReportRowResponse]
    total_cost: Decimal

    class Config:
        from_attributes = True
