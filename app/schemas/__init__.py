"""
ShiftSync - Schemas Package

Pydantic schemas for request/response validation.
"""

from app.schemas.auth import LoginResponse, TokenPayload, TokenResponse
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeDocuments,
    EmployeeResponse,
    EmployeeUpdate,
    ExpiringDocumentResponse,
    ImportRequest,
    ImportResponse,
    OffboardingDocument,
    OffboardRequest,
    RehireRequest,
)
from app.schemas.attendance import (
    AttendanceListResponse,
    AttendanceMarkRequest,
    AttendanceResponse,
    CopyDayRequest,
    CopyDayResponse,
    MonthGridResponse,
)
from app.schemas.leave import LeaveRequestCreate, LeaveRequestResponse, LeaveStatusUpdate
from app.schemas.payroll import (
    DeductionCreate,
    DeductionResponse,
    PayrollSummaryResponse,
    PayrollTotalsResponse,
    PayslipResponse,
)
from app.schemas.organization import (
    AboutProfileSchema,
    AboutProfileUpdate,
    CompanyCreate,
    CompanyListResponse,
    CompanyRename,
    HolidayCreate,
    HolidayResponse,
)
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.schemas.report import (
    AttendanceReportResponse,
    DashboardStatsResponse,
    ReportRowResponse,
)

__all__ = [
    # Auth
    "LoginResponse",
    "TokenPayload",
    "TokenResponse",
    # Employees
    "EmployeeCreate",
    "EmployeeDocuments",
    "EmployeeResponse",
    "EmployeeUpdate",
    "ExpiringDocumentResponse",
    "ImportRequest",
    "ImportResponse",
    "OffboardingDocument",
    "OffboardRequest",
    "RehireRequest",
    # Attendance
    "AttendanceListResponse",
    "AttendanceMarkRequest",
    "AttendanceResponse",
    "CopyDayRequest",
    "CopyDayResponse",
    "MonthGridResponse",
    # Leave
    "LeaveRequestCreate",
    "LeaveRequestResponse",
    "LeaveStatusUpdate",
    # Payroll
    "DeductionCreate",
    "DeductionResponse",
    "PayrollSummaryResponse",
    "PayrollTotalsResponse",
    "PayslipResponse",
    # Settings
    "AboutProfileSchema",
    "AboutProfileUpdate",
    "CompanyCreate",
    "CompanyListResponse",
    "CompanyRename",
    "HolidayCreate",
    "HolidayResponse",
    # Users
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Reports
    "AttendanceReportResponse",
    "DashboardStatsResponse",
    "ReportRowResponse",
]
