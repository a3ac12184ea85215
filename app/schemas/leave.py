"""
ShiftSync - Leave Request Schemas
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.attendance import AttendanceStatus
from app.models.leave import LeaveStatus


class LeaveRequestCreate(BaseModel):
    """Submit a leave request."""
    employee_id: UUID
    leave_type: AttendanceStatus
    start_date: date
    end_date: date
    reason: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class LeaveStatusUpdate(BaseModel):
    status: LeaveStatus


class LeaveRequestResponse(BaseModel):
    id: UUID
    employee_id: UUID
    leave_type: AttendanceStatus
    start_date: date
    end_date: date
    day_count: int
    reason: str
    status: LeaveStatus
    applied_on: datetime
    decided_at: Optional[datetime] = None
    updated_by: Optional[str] = None

    class Config:
        from_attributes = True
