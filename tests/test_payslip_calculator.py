"""
ShiftSync - Payslip Calculator Tests

Unit tests for gross, proration, variable deductions and net pay.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from app.models.attendance import AttendanceStatus
from app.models.employee import Team
from app.services.payroll_calculators import (
    EarningsRates,
    PayslipCalculator,
    daily_rate,
    resolve_period,
    sum_payslips,
)


@dataclass
class Staff:
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    code: str = "10001"
    name: str = "Aisha Khan"
    company: str = "Al Reem Henna & Beauty Saloon"
    team: Team = Team.INTERNAL
    leave_balance: int = 30
    basic: Optional[Decimal] = Decimal("3000")
    housing: Optional[Decimal] = Decimal("1000")
    transport: Optional[Decimal] = Decimal("500")
    other: Optional[Decimal] = None
    air_ticket: Optional[Decimal] = None
    leave_salary: Optional[Decimal] = None


@dataclass
class Day:
    date: date
    status: AttendanceStatus
    hours_worked: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")


@dataclass
class Deduction:
    employee_id: uuid.UUID
    date: date
    amount: Decimal


@pytest.fixture
def calculator() -> PayslipCalculator:
    return PayslipCalculator(rates=EarningsRates(), proration_divisor=30)


class TestGrossAndProration:

    def test_missing_components_count_as_zero(self, calculator):
        payslip = calculator.calculate(Staff(), [], year=2026, month=4)

        assert payslip.gross == Decimal("4500.00")
        assert payslip.other == Decimal("0.00")

    def test_two_absences_prorate_one_fifteenth(self, calculator):
        records = [
            Day(date(2026, 4, 6), AttendanceStatus.ABSENT),
            Day(date(2026, 4, 7), AttendanceStatus.UNPAID_LEAVE),
            Day(date(2026, 4, 8), AttendanceStatus.SICK_LEAVE),
        ]
        payslip = calculator.calculate(Staff(), records, year=2026, month=4)

        assert payslip.unpaid_days == 2
        assert payslip.prorated_deduction == Decimal("300.00")
        assert payslip.net == Decimal("4200.00")
        assert payslip.calendar_days == 30
        assert payslip.paid_days == 28

    def test_paid_leave_and_holidays_not_prorated(self, calculator):
        records = [
            Day(date(2026, 4, 6), AttendanceStatus.ANNUAL_LEAVE),
            Day(date(2026, 4, 7), AttendanceStatus.EMERGENCY_LEAVE),
            Day(date(2026, 4, 8), AttendanceStatus.PUBLIC_HOLIDAY),
            Day(date(2026, 4, 9), AttendanceStatus.WEEK_OFF),
        ]
        payslip = calculator.calculate(Staff(), records, year=2026, month=4)

        assert payslip.unpaid_days == 0
        assert payslip.net == Decimal("4500.00")

    def test_records_outside_period_ignored(self, calculator):
        records = [Day(date(2026, 3, 31), AttendanceStatus.ABSENT)]
        payslip = calculator.calculate(Staff(), records, year=2026, month=4)

        assert payslip.unpaid_days == 0

    def test_daily_rate(self):
        assert daily_rate(Decimal("4500")) == Decimal("150")


class TestVariableDeductions:

    def test_only_deductions_in_month_for_employee(self, calculator):
        staff = Staff()
        deductions = [
            Deduction(staff.id, date(2026, 4, 10), Decimal("200")),
            Deduction(staff.id, date(2026, 5, 1), Decimal("999")),
            Deduction(uuid.uuid4(), date(2026, 4, 10), Decimal("50")),
        ]
        payslip = calculator.calculate(staff, [], deductions, year=2026, month=4)

        assert payslip.variable_deductions == Decimal("200.00")
        assert payslip.total_deductions == Decimal("200.00")
        assert payslip.net == Decimal("4300.00")


class TestAdditions:

    def test_overtime_and_week_off_added_to_net(self, calculator):
        # 2026-04-05 is a Sunday
        records = [
            Day(date(2026, 4, 5), AttendanceStatus.PRESENT, hours_worked=Decimal("8")),
            Day(date(2026, 4, 6), AttendanceStatus.PRESENT, hours_worked=Decimal("8"),
                overtime_hours=Decimal("2")),
        ]
        payslip = calculator.calculate(Staff(), records, year=2026, month=4)

        assert payslip.overtime_pay == Decimal("10.00")
        assert payslip.week_off_pay == Decimal("40.00")
        assert payslip.total_additions == Decimal("50.00")
        assert payslip.net == Decimal("4550.00")

    def test_office_staff_gets_no_additions(self, calculator):
        records = [
            Day(date(2026, 4, 5), AttendanceStatus.PRESENT, hours_worked=Decimal("8"),
                overtime_hours=Decimal("3")),
        ]
        payslip = calculator.calculate(Staff(team=Team.OFFICE_STAFF), records, year=2026, month=4)

        assert payslip.total_additions == Decimal("0")
        assert payslip.net == Decimal("4500.00")


class TestPeriodAndTotals:

    def test_period_inferred_from_earliest_record(self):
        records = [
            Day(date(2026, 6, 3), AttendanceStatus.PRESENT),
            Day(date(2026, 5, 20), AttendanceStatus.PRESENT),
        ]
        assert resolve_period(records) == (2026, 5)

    def test_explicit_period_wins(self):
        records = [Day(date(2026, 6, 3), AttendanceStatus.PRESENT)]
        assert resolve_period(records, 2026, 1) == (2026, 1)

    def test_sum_payslips(self, calculator):
        first = calculator.calculate(Staff(), [Day(date(2026, 4, 6), AttendanceStatus.ABSENT)],
                                     year=2026, month=4)
        second = calculator.calculate(Staff(basic=Decimal("1000"), housing=None, transport=None), [],
                                      year=2026, month=4)
        totals = sum_payslips([first, second])

        assert totals.employee_count == 2
        assert totals.gross == Decimal("5500.00")
        assert totals.deductions == Decimal("150.00")
        assert totals.net == Decimal("5350.00")
        assert totals.basic == Decimal("4000.00")
