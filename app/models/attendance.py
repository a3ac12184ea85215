"""
ShiftSync - Attendance Models

One attendance record per employee per calendar day.
"""

import uuid
from datetime import date as date_type, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, Text, Uuid, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, AuditMixin


class AttendanceStatus(str, Enum):
    """Daily attendance status; values are the timesheet/CSV codes."""
    PRESENT = "P"
    ABSENT = "A"
    WEEK_OFF = "W"
    PUBLIC_HOLIDAY = "PH"
    SICK_LEAVE = "SL"
    ANNUAL_LEAVE = "AL"
    UNPAID_LEAVE = "UL"
    EMERGENCY_LEAVE = "EL"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_token(cls, token: str) -> "AttendanceStatus":
        """
        Resolve a status from a code (``P``, ``sl``) or a name
        (``Present``, ``Sick Leave``, ``SickLeave``, ``SICK_LEAVE``).

        Raises:
            ValueError: If the token matches no status.
        """
        cleaned = (token or "").strip()
        if not cleaned:
            raise ValueError("Empty attendance status")
        upper = cleaned.upper()
        for member in cls:
            if member.value == upper or member.name == upper:
                return member
        squashed = cleaned.replace(" ", "").replace("_", "").lower()
        for member, label in _LABELS.items():
            if label.replace(" ", "").lower() == squashed:
                return member
        raise ValueError(f"Unknown attendance status '{token}'")


_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.WEEK_OFF: "Week Off",
    AttendanceStatus.PUBLIC_HOLIDAY: "Public Holiday",
    AttendanceStatus.SICK_LEAVE: "Sick Leave",
    AttendanceStatus.ANNUAL_LEAVE: "Annual Leave",
    AttendanceStatus.UNPAID_LEAVE: "Unpaid Leave",
    AttendanceStatus.EMERGENCY_LEAVE: "Emergency Leave",
}

LEAVE_STATUSES = frozenset({
    AttendanceStatus.SICK_LEAVE,
    AttendanceStatus.ANNUAL_LEAVE,
    AttendanceStatus.UNPAID_LEAVE,
    AttendanceStatus.EMERGENCY_LEAVE,
})

# Statuses prorated out of pay
UNPAID_STATUSES = frozenset({
    AttendanceStatus.ABSENT,
    AttendanceStatus.UNPAID_LEAVE,
})


class AttendanceRecord(BaseModel, AuditMixin):
    """
    Attendance record keyed by (employee_id, date).

    ``hours_worked`` is derived from ``status`` and is never set directly.
    ``check_in_time`` is stamped the first time the status becomes Present.
    """

    __tablename__ = "attendance_records"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[AttendanceStatus] = mapped_column(SQLEnum(AttendanceStatus), nullable=False)
    hours_worked: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2), default=Decimal("0"), nullable=False,
    )
    overtime_hours: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2), default=Decimal("0"), nullable=False,
    )
    attachment: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True,
        comment="Opaque encoded document; never interpreted",
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    check_in_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
    )

    def __repr__(self) -> str:
        return f"<AttendanceRecord(employee_id={self.employee_id}, date={self.date}, status={self.status})>"
