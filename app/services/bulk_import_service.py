"""
ShiftSync - Bulk Import & Export Service

CSV ingestion for attendance and employees, and the attendance CSV export.

Imports are row-tolerant: a bad row is reported as ``"Row N: ..."`` (N is
1-indexed and counts the header line) and the rest of the file is still
imported. Every accepted row of one file is committed together.

Attendance columns: EmployeeCode, Date, Status, Overtime
Employee columns (positional, 23): see ``EMPLOYEE_COLUMNS``
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence

from app.config import settings
from app.models.attendance import AttendanceRecord, AttendanceStatus
from app.models.employee import Employee, EmployeeStatus, StaffType, Team
from app.services.attendance_service import AttendanceService, parse_overtime
from app.services.record_store import RecordStore
from app.utils.dates import parse_import_date
from app.utils.error_handling import ImportRowError, InvalidAmountException

logger = logging.getLogger(__name__)

ATTENDANCE_COLUMNS = ("EmployeeCode", "Date", "Status", "Overtime")

EMPLOYEE_COLUMNS = (
    "Code", "Name", "Designation", "Department", "Company", "JoiningDate",
    "Type", "Status", "Team", "Location",
    "Basic", "Housing", "Transport", "Other", "AirTicket", "LeaveSalary",
    "EmiratesID", "EIDExpiry", "Passport", "PassExpiry", "LabourCard", "LCExpiry",
    "VacationDate",
)

EXPORT_COLUMNS = (
    "Date", "Employee Code", "Employee Name", "Designation", "Company",
    "Status", "Hours", "Overtime", "Attachment", "Updated By", "Notes",
)

STAFF_TYPE_TOKENS = {
    "office": StaffType.OFFICE,
    "staff": StaffType.OFFICE,
    "worker": StaffType.WORKER,
}


@dataclass
class ImportResult:
    success: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"success": self.success, "errors": list(self.errors)}


# ===========================================
# CELL PARSING
# ===========================================

def _cell(row: Sequence[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def _decimal_or_zero(raw: str) -> Decimal:
    """Numeric cell; blank or non-numeric counts as 0."""
    if not raw:
        return Decimal("0")
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


def _row_date(raw: str, column: str) -> date:
    try:
        return parse_import_date(raw)
    except ValueError:
        raise ImportRowError(
            f"Invalid {column} '{raw}'. Use YYYY/MM/DD, DD/MM/YYYY or YYYY-MM-DD."
        )


def _optional_row_date(raw: str, column: str, code: str) -> Optional[date]:
    """Optional date cell; an unparseable value is dropped with a warning."""
    if not raw:
        return None
    try:
        return parse_import_date(raw)
    except ValueError:
        logger.warning(f"Employee import: ignoring unparseable {column} '{raw}' for employee {code}")
        return None


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _data_rows(csv_text: str):
    """Yield (row_number, cells) for non-blank rows after the header."""
    reader = csv.reader(io.StringIO(csv_text or ""))
    for row_number, row in enumerate(reader, start=1):
        if row_number == 1:
            continue
        if not any(cell.strip() for cell in row):
            continue
        yield row_number, row


def _number(value: Optional[Decimal]) -> str:
    return f"{Decimal(value or 0).normalize():f}"


class BulkImportService:
    """CSV import and export."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.attendance = AttendanceService(store)

    # ===========================================
    # ATTENDANCE IMPORT
    # ===========================================

    async def import_attendance_csv(self, csv_text: str, actor: Optional[str] = None) -> ImportResult:
        """
        Import attendance rows ``EmployeeCode,Date,Status,Overtime``.

        Status accepts the codes (P, A, W, PH, SL, AL, UL, EL) in any case or
        the long names. An empty or non-numeric Overtime counts as 0.
        """
        result = ImportResult()
        employees = {employee.code: employee for employee in await self.store.list_employees()}

        async with self.store.atomic():
            for row_number, row in _data_rows(csv_text):
                try:
                    await self._import_attendance_row(row, employees, actor)
                    result.success += 1
                except ImportRowError as exc:
                    message = f"Row {row_number}: {exc.message}"
                    logger.warning(f"Attendance import: {message}")
                    result.errors.append(message)

        logger.info(
            f"Attendance import finished: {result.success} imported, {len(result.errors)} errors"
        )
        return result

    async def _import_attendance_row(
        self,
        row: Sequence[str],
        employees: Dict[str, Employee],
        actor: Optional[str],
    ) -> AttendanceRecord:
        if len(row) < 3:
            raise ImportRowError("Invalid format")

        code = _cell(row, 0)
        employee = employees.get(code)
        if employee is None:
            raise ImportRowError(f"Employee code '{code}' not found.")

        raw_date = _cell(row, 1)
        day = _row_date(raw_date, "date format")

        raw_status = _cell(row, 2)
        try:
            status = AttendanceStatus.from_token(raw_status)
        except ValueError:
            raise ImportRowError(f"Invalid status '{raw_status}'.")

        overtime = _decimal_or_zero(_cell(row, 3))
        if overtime < 0:
            raise ImportRowError(f"Overtime cannot be negative ({overtime}).")
        try:
            overtime = parse_overtime(overtime)
        except InvalidAmountException as exc:
            raise ImportRowError(f"{exc.message} ({overtime}).")

        return await self.attendance.upsert_attendance(
            employee.id, day, status,
            overtime_hours=overtime, actor=actor, employee=employee,
        )

    # ===========================================
    # EMPLOYEE IMPORT
    # ===========================================

    async def import_employees_csv(self, csv_text: str) -> ImportResult:
        """
        Import employees from the 23-column layout.

        A row whose Code matches an existing employee updates it in place,
        keeping its id, leave balance, bank name and IBAN. New employees start
        with the default leave balance. Unknown Type, Status and Team values
        fall back to Worker, Active and Internal Team. An unparseable optional
        date (document expiries, VacationDate) is stored as missing; only a
        bad JoiningDate rejects the row.
        """
        result = ImportResult()
        employees = {employee.code: employee for employee in await self.store.list_employees()}

        async with self.store.atomic():
            for row_number, row in _data_rows(csv_text):
                try:
                    employee = await self._import_employee_row(row, employees)
                    employees[employee.code] = employee
                    result.success += 1
                except ImportRowError as exc:
                    message = f"Row {row_number}: {exc.message}"
                    logger.warning(f"Employee import: {message}")
                    result.errors.append(message)

        logger.info(
            f"Employee import finished: {result.success} imported, {len(result.errors)} errors"
        )
        return result

    async def _import_employee_row(self, row: Sequence[str], employees: Dict[str, Employee]) -> Employee:
        cells = {column: _cell(row, index) for index, column in enumerate(EMPLOYEE_COLUMNS)}

        code, name = cells["Code"], cells["Name"]
        if not code or not name:
            raise ImportRowError("Missing Code or Name")

        joining_date = _row_date(cells["JoiningDate"], "JoiningDate") if cells["JoiningDate"] else date.today()
        vacation_date = _optional_row_date(cells["VacationDate"], "VacationDate", code)

        status = EmployeeStatus.INACTIVE if cells["Status"] == EmployeeStatus.INACTIVE.value else EmployeeStatus.ACTIVE
        team = next((member for member in Team if member.value == cells["Team"]), Team.INTERNAL)
        staff_type = STAFF_TYPE_TOKENS.get(cells["Type"].lower(), StaffType.WORKER)

        documents = {
            "emirates_id": cells["EmiratesID"],
            "emirates_id_expiry": _iso(_optional_row_date(cells["EIDExpiry"], "EIDExpiry", code)),
            "passport_number": cells["Passport"],
            "passport_expiry": _iso(_optional_row_date(cells["PassExpiry"], "PassExpiry", code)),
            "labour_card_number": cells["LabourCard"],
            "labour_card_expiry": _iso(_optional_row_date(cells["LCExpiry"], "LCExpiry", code)),
        }

        employee = employees.get(code)
        if employee is None:
            employee = Employee(code=code, leave_balance=settings.default_leave_balance)

        employee.name = name
        employee.designation = cells["Designation"]
        employee.department = cells["Department"]
        employee.company = cells["Company"] or settings.default_companies[0]
        employee.joining_date = joining_date
        employee.staff_type = staff_type
        employee.team = team
        employee.work_location = cells["Location"]
        employee.basic = _decimal_or_zero(cells["Basic"])
        employee.housing = _decimal_or_zero(cells["Housing"])
        employee.transport = _decimal_or_zero(cells["Transport"])
        employee.other = _decimal_or_zero(cells["Other"])
        employee.air_ticket = _decimal_or_zero(cells["AirTicket"])
        employee.leave_salary = _decimal_or_zero(cells["LeaveSalary"])
        employee.documents = {key: value for key, value in documents.items() if value} or None
        employee.vacation_scheduled_date = vacation_date
        employee.set_status(status)

        return await self.store.put(employee)

    # ===========================================
    # ATTENDANCE EXPORT
    # ===========================================

    async def export_attendance_csv(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> str:
        """Attendance in ``EXPORT_COLUMNS`` layout."""
        records = await self.store.list_attendance(start or date.min, end or date.max)
        employees = {employee.id: employee for employee in await self.store.list_employees()}

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)
        for record in records:
            employee = employees.get(record.employee_id)
            writer.writerow([
                record.date.isoformat(),
                employee.code if employee else "",
                employee.name if employee else "Unknown",
                (employee.designation or "") if employee else "",
                (employee.company or "") if employee else "",
                AttendanceStatus(record.status).value,
                _number(record.hours_worked),
                _number(record.overtime_hours),
                "Yes" if record.attachment else "No",
                record.updated_by or "",
                record.note or "",
            ])
        return output.getvalue()
