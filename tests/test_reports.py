"""
ShiftSync - Dashboard and Attendance Report Tests
"""

import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from app.models.attendance import AttendanceStatus
from app.models.employee import Team
from app.services.attendance_service import AttendanceService
from app.services.reports_service import ReportsService
from app.utils.error_handling import InvalidDateRangeException


# 2026-03-02 (Mon) .. 2026-03-06 (Fri)
START = date(2026, 3, 2)
END = date(2026, 3, 6)


class TestDashboard:

    @pytest.mark.asyncio
    async def test_counts_for_day(self, store, test_employee, office_employee, inactive_employee):
        attendance = AttendanceService(store)
        await attendance.mark_attendance(test_employee.id, START, AttendanceStatus.PRESENT)
        await attendance.mark_attendance(office_employee.id, START, AttendanceStatus.SICK_LEAVE)

        stats = await ReportsService(store).dashboard_stats(START)

        assert stats.active_staff == 2
        assert stats.present == 1
        assert stats.on_leave == 1
        assert stats.absent == 0


class TestAttendanceReport:

    @pytest.mark.asyncio
    async def test_row_counts_and_cost(self, store, test_employee):
        attendance = AttendanceService(store)
        await attendance.mark_attendance(test_employee.id, START, AttendanceStatus.PRESENT, overtime_hours=Decimal("2"))
        await attendance.mark_attendance(test_employee.id, date(2026, 3, 3), AttendanceStatus.ABSENT)
        await attendance.mark_attendance(test_employee.id, date(2026, 3, 4), AttendanceStatus.EMERGENCY_LEAVE)
        await attendance.mark_attendance(test_employee.id, date(2026, 3, 5), AttendanceStatus.ANNUAL_LEAVE)

        report = await ReportsService(store).attendance_report(START, END)

        row = report.rows[0]
        assert (row.present, row.absent, row.leave) == (1, 2, 1)
        assert row.ot_hours == Decimal("2")
        assert row.paid_days == 3
        # 3 paid days x 4500 / 30 + 2h overtime x 5
        assert row.estimated_cost == Decimal("460.00")
        assert report.total_cost == Decimal("460.00")

    @pytest.mark.asyncio
    async def test_office_staff_has_no_overtime(self, store, office_employee):
        await AttendanceService(store).mark_attendance(
            office_employee.id, START, AttendanceStatus.PRESENT, overtime_hours=Decimal("3"),
        )

        report = await ReportsService(store).attendance_report(START, END, team=Team.OFFICE_STAFF)

        row = report.rows[0]
        assert row.ot_hours == Decimal("0")
        assert row.estimated_cost == Decimal("1000.00")

    @pytest.mark.asyncio
    async def test_company_filter_and_inactive_excluded(self, store, test_employee, inactive_employee, employee_factory):
        await employee_factory("70001", company="Salina Henna & Beauty Saloon")

        report = await ReportsService(store).attendance_report(START, END, company=test_employee.company)

        assert [row.code for row in report.rows] == ["10001"]

    @pytest.mark.asyncio
    async def test_reversed_range(self, store):
        with pytest.raises(InvalidDateRangeException):
            await ReportsService(store).attendance_report(END, START)

    @pytest.mark.asyncio
    async def test_csv_has_total_row(self, store, test_employee):
        content = await ReportsService(store).export_report_csv(START, END)
        lines = content.strip().split("\n")

        assert lines[0].endswith("Est. Cost (AED)")
        assert lines[1] == "10001,Aisha Khan,Al Reem Henna & Beauty Saloon,Internal Team,0,0,0,0,750.00"
        assert lines[-1] == "TOTAL,,,,,,,,750.00"

    @pytest.mark.asyncio
    async def test_csv_escapes_quotes_in_names(self, store, employee_factory):
        await employee_factory("10088", 'Ali "Jr" Khan', company="Naqsh, Al Reem")

        content = await ReportsService(store).export_report_csv(START, END)
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[1][:3] == ["10088", 'Ali "Jr" Khan', "Naqsh, Al Reem"]
        assert len(rows[1]) == len(rows[0])
        assert rows[-1][0] == "TOTAL"
