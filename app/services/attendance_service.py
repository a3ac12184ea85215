"""
ShiftSync - Attendance Engine

One attendance record per employee per calendar day, written with upsert
semantics on (employee_id, date).

Upsert rules:
- ``status`` and the derived ``hours_worked`` (8 for Present, else 0) are
  always overwritten.
- ``overtime_hours``, ``attachment`` and ``note`` change only when the caller
  supplies them; omitting them keeps the stored value.
- ``check_in_time`` is stamped the first time the status becomes Present and
  never changes afterwards.
"""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Union

from app.config import settings
from app.models.attendance import AttendanceRecord, AttendanceStatus
from app.models.employee import Employee
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, month_bounds, require_date
from app.utils.error_handling import EmployeeNotFoundException, InvalidAmountException, parse_choice

logger = logging.getLogger(__name__)

COPY_NOTE_TEMPLATE = "Copied from {source}"

# Bounds of the overtime_hours column
OVERTIME_STEP = Decimal("0.01")
MAX_OVERTIME_HOURS = Decimal("999.99")


@dataclass
class MonthGrid:
    """Attendance records of one month keyed by employee."""
    year: int
    month: int
    start: date
    end: date
    records: Dict[uuid.UUID, Dict[date, AttendanceRecord]] = field(default_factory=dict)


def hours_for_status(status: AttendanceStatus) -> Decimal:
    """Hours worked implied by a status."""
    if AttendanceStatus(status) == AttendanceStatus.PRESENT:
        return settings.standard_shift_hours
    return Decimal("0")


def parse_overtime(value: object) -> Decimal:
    """
    Overtime hours as a Decimal with at most two decimal places.

    Raises:
        InvalidAmountException: If the value is not a number, is negative,
            has more than two decimal places or exceeds the column limit
    """
    try:
        hours = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmountException(
            value, field="overtime_hours", message=f"Invalid overtime hours '{value}'",
        ) from None
    if not hours.is_finite():
        raise InvalidAmountException(
            value, field="overtime_hours", message=f"Invalid overtime hours '{value}'",
        )
    if hours < 0:
        raise InvalidAmountException(
            hours, field="overtime_hours", message="Overtime hours cannot be negative",
        )
    if hours > MAX_OVERTIME_HOURS:
        raise InvalidAmountException(
            hours, field="overtime_hours",
            message=f"Overtime hours cannot exceed {MAX_OVERTIME_HOURS}",
        )
    if hours != hours.quantize(OVERTIME_STEP):
        raise InvalidAmountException(
            hours, field="overtime_hours",
            message="Overtime hours allow at most two decimal places",
        )
    return hours


class AttendanceService:
    """Attendance engine over a record store."""

    def __init__(self, store: RecordStore):
        self.store = store

    # ===========================================
    # MARKING
    # ===========================================

    async def upsert_attendance(
        self,
        employee_id: uuid.UUID,
        day: DateLike,
        status: Union[AttendanceStatus, str],
        overtime_hours: Optional[Decimal] = None,
        attachment: Optional[str] = None,
        actor: Optional[str] = None,
        note: Optional[str] = None,
        employee: Optional[Employee] = None,
    ) -> AttendanceRecord:
        """
        Stage an attendance upsert without committing.

        Used directly by multi-record operations that commit once at the end.

        Raises:
            EmployeeNotFoundException: If the employee does not exist
            ValidationException: If the day or status is malformed
            InvalidAmountException: If overtime hours are invalid
        """
        if employee is None:
            employee = await self.store.get_employee(employee_id)
            if not employee:
                raise EmployeeNotFoundException(employee_id)

        day = require_date(day)
        status = parse_choice(AttendanceStatus, status, "status", parser=AttendanceStatus.from_token)
        if overtime_hours is not None:
            overtime_hours = parse_overtime(overtime_hours)

        record = await self.store.get_attendance(employee_id, day)
        if record is None:
            record = AttendanceRecord(
                employee_id=employee_id,
                date=day,
                overtime_hours=Decimal("0"),
            )

        record.status = status
        record.hours_worked = hours_for_status(status)

        if overtime_hours is not None:
            record.overtime_hours = overtime_hours
        elif record.overtime_hours is None:
            record.overtime_hours = Decimal("0")

        if attachment is not None:
            record.attachment = attachment
        if note is not None:
            record.note = note
        if actor is not None:
            record.updated_by = actor

        if status == AttendanceStatus.PRESENT and record.check_in_time is None:
            record.check_in_time = datetime.now(timezone.utc)

        return await self.store.put(record)

    async def mark_attendance(
        self,
        employee_id: uuid.UUID,
        day: DateLike,
        status: Union[AttendanceStatus, str],
        overtime_hours: Optional[Decimal] = None,
        attachment: Optional[str] = None,
        actor: Optional[str] = None,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Create or update the record for (employee_id, day) and commit."""
        record = await self.upsert_attendance(
            employee_id, day, status,
            overtime_hours=overtime_hours,
            attachment=attachment,
            actor=actor,
            note=note,
        )
        await self.store.commit()
        await self.store.refresh(record)
        return record

    async def delete_attendance(self, employee_id: uuid.UUID, day: DateLike) -> bool:
        """Remove the record for (employee_id, day); False when there is none."""
        record = await self.store.get_attendance(employee_id, require_date(day))
        if record is None:
            return False
        await self.store.delete(record)
        await self.store.commit()
        return True

    # ===========================================
    # BULK OPERATIONS
    # ===========================================

    async def copy_day(
        self,
        source: DateLike,
        target: DateLike,
        actor: Optional[str] = None,
    ) -> int:
        """
        Copy every record of ``source`` onto ``target``.

        Existing target records for the same employees are overwritten.
        Overtime and attachment are copied as-is (a missing source attachment
        clears the target's), the note records the source date and a copied
        non-Present status clears the target's check-in time.

        Returns:
            Number of records copied (0 when the source day is empty)
        """
        source = require_date(source, "source")
        target = require_date(target, "target")
        records = await self.store.list_attendance_on(source)
        if not records:
            return 0

        note = COPY_NOTE_TEMPLATE.format(source=source.isoformat())
        async with self.store.atomic():
            for record in records:
                copied = await self.upsert_attendance(
                    record.employee_id,
                    target,
                    record.status,
                    overtime_hours=record.overtime_hours,
                    actor=actor,
                    note=note,
                )
                copied.attachment = record.attachment
                if copied.status != AttendanceStatus.PRESENT:
                    copied.check_in_time = None
                await self.store.put(copied)

        logger.info(f"Copied {len(records)} attendance records from {source} to {target}")
        return len(records)

    async def apply_public_holiday(self, day: DateLike, actor: Optional[str] = None) -> int:
        """
        Stage a Public Holiday record for every active employee on ``day``,
        overwriting any status already marked. The caller commits.

        Returns:
            Number of employees stamped
        """
        day = require_date(day)
        employees = await self.store.list_employees(active_only=True)
        for employee in employees:
            await self.upsert_attendance(
                employee.id, day, AttendanceStatus.PUBLIC_HOLIDAY,
                actor=actor, employee=employee,
            )
        return len(employees)

    # ===========================================
    # QUERIES
    # ===========================================

    async def list_attendance(
        self,
        start: DateLike,
        end: DateLike,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[AttendanceRecord]:
        return await self.store.list_attendance(
            require_date(start, "start"), require_date(end, "end"), employee_id=employee_id,
        )

    async def get_attendance(self, employee_id: uuid.UUID, day: DateLike) -> Optional[AttendanceRecord]:
        return await self.store.get_attendance(employee_id, require_date(day))

    async def month_grid(self, year: int, month: int) -> MonthGrid:
        """Records of a calendar month keyed by employee, then by date."""
        start, end = month_bounds(year, month)
        grid: Dict[uuid.UUID, Dict[date, AttendanceRecord]] = defaultdict(dict)
        for record in await self.store.list_attendance(start, end):
            grid[record.employee_id][record.date] = record
        return MonthGrid(year=year, month=month, start=start, end=end, records=dict(grid))
