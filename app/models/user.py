"""
ShiftSync - System User Model

Application users with role and per-module permission flags.

Role hierarchy (informal): Creator > Admin > HR > Supervisor > Engineer.
Creator and Admin implicitly hold every permission. The Creator account and
the configured default admin cannot be deleted.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from sqlalchemy import Boolean, DateTime, String, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class UserRole(str, Enum):
    """System user roles."""
    CREATOR = "Creator"
    ADMIN = "Admin"
    HR = "HR"
    SUPERVISOR = "Supervisor"
    ENGINEER = "Engineer"


class Permission(str, Enum):
    """Per-module permission flags."""
    VIEW_DASHBOARD = "can_view_dashboard"
    MANAGE_EMPLOYEES = "can_manage_employees"  # add, edit, onboard, offboard
    VIEW_DIRECTORY = "can_view_directory"
    MANAGE_ATTENDANCE = "can_manage_attendance"
    VIEW_TIMESHEET = "can_view_timesheet"
    MANAGE_LEAVES = "can_manage_leaves"
    VIEW_PAYROLL = "can_view_payroll"
    MANAGE_PAYROLL = "can_manage_payroll"
    VIEW_REPORTS = "can_view_reports"
    MANAGE_USERS = "can_manage_users"
    MANAGE_SETTINGS = "can_manage_settings"  # companies, holidays


FULL_ACCESS_ROLES = frozenset({UserRole.CREATOR, UserRole.ADMIN})


def all_permissions(granted: bool = True) -> Dict[str, bool]:
    return {permission.value: granted for permission in Permission}


class SystemUser(BaseModel):
    """Application login account."""

    __tablename__ = "system_users"

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[UserRole] = mapped_column(SQLEnum(UserRole), default=UserRole.ENGINEER, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    permissions: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def has_permission(self, permission: Permission) -> bool:
        if UserRole(self.role) in FULL_ACCESS_ROLES:
            return True
        return bool((self.permissions or {}).get(Permission(permission).value, False))

    def __repr__(self) -> str:
        return f"<SystemUser(username={self.username}, role={self.role})>"
