"""
ShiftSync - Routers Package

FastAPI route handlers.

Routers:
- auth: Login and current user
- employees: Employee records, documents, import, offboarding
- attendance: Daily attendance, month grid, copy-day, CSV import/export
- leaves: Leave requests and approvals
- payroll: Payslips, payroll summary, deductions
- settings: Public holidays, companies, About page
- users: System user management
- reports: Dashboard and attendance cost report
"""

from app.routers import (
    auth,
    employees,
    attendance,
    leaves,
    payroll,
    settings,
    users,
    reports,
)

__all__ = [
    "auth",
    "employees",
    "attendance",
    "leaves",
    "payroll",
    "settings",
    "users",
    "reports",
]
