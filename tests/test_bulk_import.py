"""
ShiftSync - Bulk Import & Export Tests
"""

import csv
import io
from datetime import date
from decimal import Decimal

import pytest

from app.config import settings
from app.models.attendance import AttendanceStatus
from app.models.employee import EmployeeStatus, StaffType, Team
from app.services.attendance_service import AttendanceService
from app.services.bulk_import_service import EXPORT_COLUMNS, BulkImportService


ATTENDANCE_HEADER = "EmployeeCode,Date,Status,Overtime\n"
EMPLOYEE_HEADER = (
    "Code,Name,Designation,Department,Company,JoiningDate,Type,Status,Team,Location,"
    "Basic,Housing,Transport,Other,AirTicket,LeaveSalary,EmiratesID,EIDExpiry,"
    "Passport,PassExpiry,LabourCard,LCExpiry,VacationDate\n"
)


class TestAttendanceImport:

    @pytest.mark.asyncio
    async def test_accepts_all_date_formats(self, store, test_employee):
        csv_text = ATTENDANCE_HEADER + (
            "10001,2026/03/02,P,2\n"
            "10001,03/03/2026,sick leave,\n"
            "10001,2026-03-04,a,abc\n"
        )
        result = await BulkImportService(store).import_attendance_csv(csv_text, actor="admin")

        assert result.success == 3
        assert result.errors == []
        attendance = AttendanceService(store)
        first = await attendance.get_attendance(test_employee.id, date(2026, 3, 2))
        assert first.status == AttendanceStatus.PRESENT
        assert first.overtime_hours == Decimal("2")
        second = await attendance.get_attendance(test_employee.id, date(2026, 3, 3))
        assert second.status == AttendanceStatus.SICK_LEAVE
        third = await attendance.get_attendance(test_employee.id, date(2026, 3, 4))
        assert third.status == AttendanceStatus.ABSENT
        assert third.overtime_hours == Decimal("0")

    @pytest.mark.asyncio
    async def test_bad_rows_reported_and_rest_imported(self, store, test_employee):
        csv_text = ATTENDANCE_HEADER + (
            "10001,2026-03-02,P,0\n"
            "99999,2026-03-02,P,0\n"
            "10001,2026-03-32,P,0\n"
            "10001,2026-03-05,XYZ,0\n"
            "10001,2026-03-06\n"
            "\n"
            "10001,2026-03-07,W,-1\n"
        )
        result = await BulkImportService(store).import_attendance_csv(csv_text)

        assert result.success == 1
        assert result.errors[0] == "Row 3: Employee code '99999' not found."
        assert result.errors[1].startswith("Row 4: Invalid date format")
        assert result.errors[2] == "Row 5: Invalid status 'XYZ'."
        assert result.errors[3] == "Row 6: Invalid format"
        assert result.errors[4].startswith("Row 8:")
        assert len(result.errors) == 5

    @pytest.mark.asyncio
    async def test_overtime_precision_is_a_row_error(self, store, test_employee):
        csv_text = ATTENDANCE_HEADER + (
            "10001,2026-03-02,P,1.005\n"
            "10001,2026-03-03,P,1.25\n"
        )
        result = await BulkImportService(store).import_attendance_csv(csv_text)

        assert result.success == 1
        assert result.errors[0].startswith("Row 2: Overtime hours allow at most two decimal places")
        assert await AttendanceService(store).get_attendance(test_employee.id, date(2026, 3, 2)) is None

    @pytest.mark.asyncio
    async def test_import_overwrites_existing_day(self, store, test_employee):
        attendance = AttendanceService(store)
        await attendance.mark_attendance(test_employee.id, date(2026, 3, 2), AttendanceStatus.ABSENT)

        await BulkImportService(store).import_attendance_csv(ATTENDANCE_HEADER + "10001,2026-03-02,PH,0\n")

        record = await attendance.get_attendance(test_employee.id, date(2026, 3, 2))
        assert record.status == AttendanceStatus.PUBLIC_HOLIDAY


class TestEmployeeImport:

    @pytest.mark.asyncio
    async def test_creates_new_employee_with_defaults(self, store):
        csv_text = EMPLOYEE_HEADER + (
            "50001,Fatima Ali,Stylist,Salon,,15/01/2025,Staff,Active,External Team,Dubai,"
            "2000,800,200,0,100,0,784-1990-1234567-1,2027-01-01,P1234567,2030/06/30,,,\n"
        )
        result = await BulkImportService(store).import_employees_csv(csv_text)

        assert result.success == 1
        employee = await store.get_employee_by_code("50001")
        assert employee.company == settings.default_companies[0]
        assert employee.joining_date == date(2025, 1, 15)
        assert employee.staff_type == StaffType.OFFICE
        assert employee.team == Team.EXTERNAL
        assert employee.leave_balance == settings.default_leave_balance
        assert employee.gross_salary == Decimal("3100")
        assert employee.documents["passport_expiry"] == "2030-06-30"
        assert "labour_card_number" not in employee.documents

    @pytest.mark.asyncio
    async def test_unknown_enums_fall_back(self, store):
        csv_text = EMPLOYEE_HEADER + "50002,Sara,,,Acme,,Contractor,Retired,Night Team,,,,,,,,,,,,,,\n"
        await BulkImportService(store).import_employees_csv(csv_text)

        employee = await store.get_employee_by_code("50002")
        assert employee.staff_type == StaffType.WORKER
        assert employee.status == EmployeeStatus.ACTIVE
        assert employee.active is True
        assert employee.team == Team.INTERNAL
        assert employee.basic == Decimal("0")

    @pytest.mark.asyncio
    async def test_existing_code_updates_in_place(self, store, employee_factory):
        existing = await employee_factory(
            "10009", "Old Name", leave_balance=12, bank_name="ADCB", iban="AE070331234567890123456",
        )
        csv_text = EMPLOYEE_HEADER + (
            "10009,New Name,Manager,Ops,Acme,2024-02-01,Worker,Inactive,Internal Team,,"
            "5000,0,0,0,0,0,,,,,,,\n"
        )
        result = await BulkImportService(store).import_employees_csv(csv_text)

        assert result.success == 1
        employee = await store.get_employee_by_code("10009")
        assert employee.id == existing.id
        assert employee.name == "New Name"
        assert employee.leave_balance == 12
        assert employee.bank_name == "ADCB"
        assert employee.iban == "AE070331234567890123456"
        assert employee.status == EmployeeStatus.INACTIVE
        assert employee.active is False

    @pytest.mark.asyncio
    async def test_row_errors(self, store):
        csv_text = EMPLOYEE_HEADER + (
            ",No Code,,,,,,,,,,,,,,,,,,,,,\n"
            "50003,Bad Date,,,,2025-02-30,,,,,,,,,,,,,,,,,\n"
            "50004,Good Row\n"
        )
        result = await BulkImportService(store).import_employees_csv(csv_text)

        assert result.success == 1
        assert result.errors[0] == "Row 2: Missing Code or Name"
        assert result.errors[1].startswith("Row 3: Invalid JoiningDate")
        assert await store.get_employee_by_code("50003") is None


    @pytest.mark.asyncio
    async def test_unparseable_optional_dates_are_dropped(self, store):
        csv_text = EMPLOYEE_HEADER + (
            "50005,Noor,,,,2025-01-15,,,,,,,,,,,784-1990-7654321-1,N/A,P7654321,2031-01-01,,,soon\n"
        )
        result = await BulkImportService(store).import_employees_csv(csv_text)

        assert result.success == 1
        assert result.errors == []
        employee = await store.get_employee_by_code("50005")
        assert employee.documents["emirates_id"] == "784-1990-7654321-1"
        assert "emirates_id_expiry" not in employee.documents
        assert employee.documents["passport_expiry"] == "2031-01-01"
        assert employee.vacation_scheduled_date is None


class TestAttendanceExport:

    @pytest.mark.asyncio
    async def test_export_layout(self, store, test_employee):
        attendance = AttendanceService(store)
        await attendance.mark_attendance(
            test_employee.id, date(2026, 3, 2), AttendanceStatus.PRESENT,
            overtime_hours=Decimal("1.5"), attachment="data:;base64,AA", actor="admin",
            note='Said "hi"',
        )
        await attendance.mark_attendance(test_employee.id, date(2026, 4, 1), AttendanceStatus.ABSENT)

        content = await BulkImportService(store).export_attendance_csv(date(2026, 3, 1), date(2026, 3, 31))
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[0] == list(EXPORT_COLUMNS)
        assert len(rows) == 2
        assert rows[1] == [
            "2026-03-02", "10001", "Aisha Khan", "Beautician", "Al Reem Henna & Beauty Saloon",
            "P", "8", "1.5", "Yes", "admin", 'Said "hi"',
        ]
        assert content.splitlines()[1].endswith(',"Said ""hi"""')

    @pytest.mark.asyncio
    async def test_export_escapes_quotes_and_commas_in_names(self, store, employee_factory):
        employee = await employee_factory("10077", 'Ali "Jr" Khan', designation="Stylist, Senior")
        await AttendanceService(store).mark_attendance(employee.id, date(2026, 3, 2), AttendanceStatus.PRESENT)

        content = await BulkImportService(store).export_attendance_csv()
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[1][1:4] == ["10077", 'Ali "Jr" Khan', "Stylist, Senior"]
        assert len(rows[1]) == len(EXPORT_COLUMNS)

    @pytest.mark.asyncio
    async def test_export_without_range(self, store, test_employee):
        await AttendanceService(store).mark_attendance(test_employee.id, date(2026, 4, 1), AttendanceStatus.ABSENT)

        content = await BulkImportService(store).export_attendance_csv()

        assert content.count("\n") == 2
        assert ",A,0,0,No," in content
