"""
ShiftSync - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin, AuditMixin
from app.models.employee import (
    Employee,
    StaffType,
    Team,
    EmployeeStatus,
    ExitType,
    SALARY_COMPONENTS,
    DOCUMENT_FIELDS,
)
from app.models.attendance import (
    AttendanceRecord,
    AttendanceStatus,
    LEAVE_STATUSES,
    UNPAID_STATUSES,
)
from app.models.leave import LeaveRequest, LeaveStatus
from app.models.payroll import DeductionRecord, DeductionType
from app.models.organization import Company, PublicHoliday, AboutProfile
from app.models.user import SystemUser, UserRole, Permission

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "AuditMixin",
    "Employee",
    "StaffType",
    "Team",
    "EmployeeStatus",
    "ExitType",
    "SALARY_COMPONENTS",
    "DOCUMENT_FIELDS",
    "AttendanceRecord",
    "AttendanceStatus",
    "LEAVE_STATUSES",
    "UNPAID_STATUSES",
    "LeaveRequest",
    "LeaveStatus",
    "DeductionRecord",
    "DeductionType",
    "Company",
    "PublicHoliday",
    "AboutProfile",
    "SystemUser",
    "UserRole",
    "Permission",
]
