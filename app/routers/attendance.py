"""
ShiftSync - Attendance Router

API endpoints for marking attendance, the monthly timesheet grid, copy-day,
and attendance CSV import/export.
"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from app.dependencies import get_record_store, require_permission
from app.models.user import Permission, SystemUser
from app.schemas.attendance import (
    AttendanceListResponse,
    AttendanceMarkRequest,
    AttendanceResponse,
    CopyDayRequest,
    CopyDayResponse,
    MonthGridResponse,
)
from app.schemas.employee import ImportRequest, ImportResponse
from app.services.attendance_service import AttendanceService
from app.services.bulk_import_service import BulkImportService
from app.services.record_store import RecordStore
from app.utils.error_handling import InvalidDateRangeException


router = APIRouter()


@router.post(
    "",
    response_model=AttendanceResponse,
    summary="Mark attendance",
    description="Create or update the record for one employee and day.",
)
async def mark_attendance(
    data: AttendanceMarkRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_ATTENDANCE)),
):
    return await AttendanceService(store).mark_attendance(
        data.employee_id,
        data.date,
        data.status,
        overtime_hours=data.overtime_hours,
        attachment=data.attachment,
        actor=current_user.username,
        note=data.note,
    )


@router.delete(
    "/{employee_id}/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an attendance record",
)
async def delete_attendance(
    employee_id: uuid.UUID,
    day: date,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_ATTENDANCE)),
):
    deleted = await AttendanceService(store).delete_attendance(employee_id, day)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Attendance record not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "",
    response_model=AttendanceListResponse,
    summary="Attendance in a date range",
)
async def list_attendance(
    start: date = Query(...),
    end: date = Query(...),
    employee_id: Optional[uuid.UUID] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_TIMESHEET)),
):
    if start > end:
        raise InvalidDateRangeException(start, end)
    records = await AttendanceService(store).list_attendance(start, end, employee_id)
    return AttendanceListResponse(
        records=[AttendanceResponse.model_validate(record) for record in records],
        total=len(records),
    )


@router.get(
    "/month/{year}/{month}",
    response_model=MonthGridResponse,
    summary="Monthly timesheet grid",
)
async def month_grid(
    year: int = Path(..., ge=2000, le=2100),
    month: int = Path(..., ge=1, le=12),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_TIMESHEET)),
):
    grid = await AttendanceService(store).month_grid(year, month)
    return MonthGridResponse(
        year=grid.year,
        month=grid.month,
        start=grid.start,
        end=grid.end,
        records={
            str(employee_id): {
                day.isoformat(): AttendanceResponse.model_validate(record)
                for day, record in days.items()
            }
            for employee_id, days in grid.records.items()
        },
    )


@router.post(
    "/copy-day",
    response_model=CopyDayResponse,
    summary="Copy one day's attendance onto another day",
)
async def copy_day(
    data: CopyDayRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_ATTENDANCE)),
):
    copied = await AttendanceService(store).copy_day(
        data.source_date, data.target_date, actor=current_user.username,
    )
    return CopyDayResponse(copied=copied)


@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Import attendance from CSV",
    description="Columns EmployeeCode,Date,Status,Overtime. Bad rows are reported, not fatal.",
)
async def import_attendance(
    data: ImportRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_ATTENDANCE)),
):
    result = await BulkImportService(store).import_attendance_csv(
        data.csv_text, actor=current_user.username,
    )
    return result.to_dict()


@router.get(
    "/export",
    summary="Export attendance as CSV",
    response_class=Response,
)
async def export_attendance(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_TIMESHEET)),
):
    content = await BulkImportService(store).export_attendance_csv(start, end)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="shiftsync_attendance.csv"'},
    )
