"""
ShiftSync - Reports Router

API endpoints for dashboard counters and the attendance cost report.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from app.dependencies import get_record_store, require_permission
from app.models.employee import Team
from app.models.user import Permission, SystemUser
from app.schemas.report import AttendanceReportResponse, DashboardStatsResponse
from app.services.record_store import RecordStore
from app.services.reports_service import ReportsService


router = APIRouter()


@router.get(
    "/dashboard",
    response_model=DashboardStatsResponse,
    summary="Dashboard statistics",
    description="Active headcount plus present, on-leave and absent counts for a day.",
)
async def get_dashboard(
    day: Optional[date] = Query(None, description="Defaults to today"),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_DASHBOARD)),
):
    return await ReportsService(store).dashboard_stats(day)


@router.get(
    "/attendance",
    response_model=AttendanceReportResponse,
    summary="Attendance cost report",
)
async def get_attendance_report(
    start: date = Query(...),
    end: date = Query(...),
    company: Optional[str] = Query(None),
    team: Optional[Team] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_REPORTS)),
):
    return await ReportsService(store).attendance_report(start, end, company=company, team=team)


@router.get(
    "/attendance/export",
    summary="Attendance cost report as CSV",
    response_class=Response,
)
async def export_attendance_report(
    start: date = Query(...),
    end: date = Query(...),
    company: Optional[str] = Query(None),
    team: Optional[Team] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_REPORTS)),
):
    content = await ReportsService(store).export_report_csv(start, end, company=company, team=team)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="attendance_report_{start}_{end}.csv"'},
    )
