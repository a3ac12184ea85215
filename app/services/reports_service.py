"""
ShiftSync - Reports Service

Dashboard counters and the attendance cost report.

Report rows per active employee:
- present: Present days
- absent: Absent, Unpaid Leave and Emergency Leave days
- leave: Sick and Annual Leave days
- ot_hours: overtime hours (always 0 for Office Staff)
- estimated_cost: paid_days x gross / 30 + supplemental earnings, where
  paid_days is the inclusive range length minus absent days
"""

import csv
import io
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from app.config import settings
from app.models.attendance import AttendanceStatus, LEAVE_STATUSES
from app.models.employee import Team
from app.services.organization_service import HolidayService
from app.services.payroll_calculators import (
    EarningsCalculator,
    EarningsRates,
    daily_rate,
    is_overtime_eligible,
)
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, inclusive_days, require_date
from app.utils.error_handling import InvalidDateRangeException

logger = logging.getLogger(__name__)

REPORT_ABSENT_STATUSES = frozenset({
    AttendanceStatus.ABSENT,
    AttendanceStatus.UNPAID_LEAVE,
    AttendanceStatus.EMERGENCY_LEAVE,
})

REPORT_LEAVE_STATUSES = frozenset({
    AttendanceStatus.SICK_LEAVE,
    AttendanceStatus.ANNUAL_LEAVE,
})


@dataclass
class DashboardStats:
    day: date
    active_staff: int = 0
    present: int = 0
    on_leave: int = 0
    absent: int = 0


@dataclass
class ReportRow:
    employee_id: uuid.UUID
    code: str
    name: str
    company: str
    team: str
    present: int = 0
    absent: int = 0
    leave: int = 0
    ot_hours: Decimal = Decimal("0")
    paid_days: int = 0
    estimated_cost: Decimal = Decimal("0")


@dataclass
class AttendanceReport:
    start: date
    end: date
    rows: List[ReportRow] = field(default_factory=list)

    @property
    def total_cost(self) -> Decimal:
        return sum((row.estimated_cost for row in self.rows), Decimal("0"))


class ReportsService:
    """Dashboard and attendance reports."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.holidays = HolidayService(store)
        self.earnings = EarningsCalculator(EarningsRates.from_settings())

    async def dashboard_stats(self, day: Optional[DateLike] = None) -> DashboardStats:
        """Active headcount and the day's present / on-leave / absent counts."""
        day = require_date(day) if day else date.today()
        stats = DashboardStats(day=day)
        stats.active_staff = len(await self.store.list_employees(active_only=True))

        for record in await self.store.list_attendance_on(day):
            status = AttendanceStatus(record.status)
            if status == AttendanceStatus.PRESENT:
                stats.present += 1
            elif status in LEAVE_STATUSES:
                stats.on_leave += 1
            elif status == AttendanceStatus.ABSENT:
                stats.absent += 1
        return stats

    async def attendance_report(
        self,
        start: DateLike,
        end: DateLike,
        company: Optional[str] = None,
        team: Optional[Team] = None,
    ) -> AttendanceReport:
        start = require_date(start, "start")
        end = require_date(end, "end")
        if start > end:
            raise InvalidDateRangeException(start, end)

        employees = await self.store.list_employees(active_only=True, company=company, team=team)
        records = await self.store.list_attendance(
            start, end, employee_ids=[employee.id for employee in employees],
        )
        holidays = await self.holidays.known_holiday_dates()
        range_days = inclusive_days(start, end)

        report = AttendanceReport(start=start, end=end)
        for employee in employees:
            employee_records = [record for record in records if record.employee_id == employee.id]
            row = ReportRow(
                employee_id=employee.id,
                code=employee.code,
                name=employee.name,
                company=employee.company,
                team=Team(employee.team).value,
            )
            ot_hours = Decimal("0")
            for record in employee_records:
                status = AttendanceStatus(record.status)
                if status == AttendanceStatus.PRESENT:
                    row.present += 1
                elif status in REPORT_ABSENT_STATUSES:
                    row.absent += 1
                elif status in REPORT_LEAVE_STATUSES:
                    row.leave += 1
                ot_hours += record.overtime_hours or Decimal("0")

            row.ot_hours = ot_hours if is_overtime_eligible(employee.team) else Decimal("0")
            row.paid_days = range_days - row.absent

            supplemental = self.earnings.calculate(employee_records, employee.team, holidays)
            cost = row.paid_days * daily_rate(employee.gross_salary, settings.proration_divisor)
            row.estimated_cost = (cost + supplemental.total_additions).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP,
            )
            report.rows.append(row)

        return report

    async def export_report_csv(
        self,
        start: DateLike,
        end: DateLike,
        company: Optional[str] = None,
        team: Optional[Team] = None,
    ) -> str:
        """Report as CSV with a closing TOTAL row."""
        report = await self.attendance_report(start, end, company, team)
        headers = [
            "Code", "Name", "Company", "Team", "Present Days", "Absent Days",
            "Leave Days", "OT Hours", f"Est. Cost ({settings.currency})",
        ]
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(headers)
        for row in report.rows:
            writer.writerow([
                row.code,
                row.name,
                row.company or "",
                row.team,
                row.present,
                row.absent,
                row.leave,
                f"{row.ot_hours.normalize():f}",
                f"{row.estimated_cost:.2f}",
            ])
        writer.writerow(["TOTAL"] + [""] * 7 + [f"{report.total_cost:.2f}"])
        return output.getvalue()
