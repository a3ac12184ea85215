"""
ShiftSync - Services Package

Business logic services.
"""

from app.services.record_store import RecordStore
from app.services.employee_service import EmployeeService
from app.services.attendance_service import AttendanceService
from app.services.leave_service import LeaveService
from app.services.organization_service import AboutService, CompanyService, HolidayService
from app.services.offboarding_service import OffboardingService
from app.services.payroll_service import PayrollService
from app.services.bulk_import_service import BulkImportService
from app.services.user_service import UserService
from app.services.reports_service import ReportsService

__all__ = [
    "RecordStore",
    "EmployeeService",
    "AttendanceService",
    "LeaveService",
    "AboutService",
    "CompanyService",
    "HolidayService",
    "OffboardingService",
    "PayrollService",
    "BulkImportService",
    "UserService",
    "ReportsService",
]
