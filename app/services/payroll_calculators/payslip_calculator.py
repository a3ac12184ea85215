"""
ShiftSync - Payslip Calculator

Combines an employee's fixed salary structure, attendance-derived unpaid
days, variable deductions and supplemental earnings into a monthly payslip.

    gross              = basic + housing + transport + other + air_ticket + leave_salary
    prorated_deduction = gross / 30 x unpaid days (Absent, Unpaid Leave)
    net                = gross - prorated_deduction - variable_deductions + total_additions

The 30-day divisor does not follow the actual month length.
"""

import uuid
from dataclasses import dataclass, asdict, field, fields
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Protocol

from app.config import settings
from app.models.attendance import AttendanceStatus, UNPAID_STATUSES
from app.models.employee import SALARY_COMPONENTS
from app.services.payroll_calculators.earnings_calculator import (
    AttendanceLike,
    EarningsCalculator,
    EarningsRates,
)
from app.utils.dates import days_in_month


ZERO = Decimal("0")
MONEY_PLACES = Decimal("0.01")


class DeductionLike(Protocol):
    employee_id: uuid.UUID
    date: date
    amount: Decimal


def _money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _component(employee: Any, name: str) -> Decimal:
    value = getattr(employee, name, None)
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass
class Payslip:
    """Monthly payroll figures for one employee."""
    employee_id: Optional[uuid.UUID]
    employee_code: str
    employee_name: str
    company: str
    team: str
    year: int
    month: int

    basic: Decimal = ZERO
    housing: Decimal = ZERO
    transport: Decimal = ZERO
    other: Decimal = ZERO
    air_ticket: Decimal = ZERO
    leave_salary: Decimal = ZERO
    gross: Decimal = ZERO

    calendar_days: int = 0
    unpaid_days: int = 0
    paid_days: int = 0

    prorated_deduction: Decimal = ZERO
    variable_deductions: Decimal = ZERO
    total_deductions: Decimal = ZERO

    overtime_pay: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    week_off_pay: Decimal = ZERO
    total_additions: Decimal = ZERO
    total_overtime_hours: Decimal = ZERO

    net: Decimal = ZERO
    leave_balance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PayrollTotals:
    """Field-wise sum of payslips."""
    basic: Decimal = ZERO
    housing: Decimal = ZERO
    transport: Decimal = ZERO
    air_ticket: Decimal = ZERO
    leave_salary: Decimal = ZERO
    other: Decimal = ZERO
    gross: Decimal = ZERO
    deductions: Decimal = ZERO
    additions: Decimal = ZERO
    net: Decimal = ZERO
    employee_count: int = 0

    def add(self, payslip: Payslip) -> None:
        self.basic += payslip.basic
        self.housing += payslip.housing
        self.transport += payslip.transport
        self.air_ticket += payslip.air_ticket
        self.leave_salary += payslip.leave_salary
        self.other += payslip.other
        self.gross += payslip.gross
        self.deductions += payslip.total_deductions
        self.additions += payslip.total_additions
        self.net += payslip.net
        self.employee_count += 1

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class PayrollSummary:
    year: int
    month: int
    payslips: List[Payslip] = field(default_factory=list)
    totals: PayrollTotals = field(default_factory=PayrollTotals)


def resolve_period(
    records: Iterable[AttendanceLike],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> tuple:
    """
    Payroll period: the explicit (year, month), else the month of the
    earliest record, else the current month.
    """
    if year and month:
        return year, month
    dates = [record.date for record in records]
    anchor = min(dates) if dates else date.today()
    return year or anchor.year, month or anchor.month


class PayslipCalculator:
    """Monthly payslip calculator."""

    def __init__(
        self,
        rates: Optional[EarningsRates] = None,
        proration_divisor: Optional[int] = None,
    ):
        self.earnings = EarningsCalculator(rates or EarningsRates.from_settings())
        self.proration_divisor = Decimal(proration_divisor or settings.proration_divisor)

    def calculate(
        self,
        employee: Any,
        records: Iterable[AttendanceLike],
        deductions: Iterable[DeductionLike] = (),
        holidays: Iterable[date] = (),
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Payslip:
        """
        Compute a payslip.

        Args:
            employee: Employee (missing salary components count as zero)
            records: The employee's attendance records
            deductions: Deduction records; only the employee's deductions
                dated in the payroll month are applied
            holidays: Known public holiday dates
            year, month: Payroll period; defaults to the month of the records

        Returns:
            Payslip
        """
        records = list(records)
        year, month = resolve_period(records, year, month)
        period_records = [
            record for record in records
            if record.date.year == year and record.date.month == month
        ]

        components = {name: _component(employee, name) for name in SALARY_COMPONENTS}
        gross = sum(components.values(), ZERO)

        unpaid_days = sum(
            1 for record in period_records
            if AttendanceStatus(record.status) in UNPAID_STATUSES
        )
        prorated = _money(gross / self.proration_divisor * unpaid_days)

        employee_id = getattr(employee, "id", None)
        variable = _money(sum(
            (
                Decimal(str(deduction.amount))
                for deduction in deductions
                if deduction.employee_id == employee_id
                and deduction.date.year == year
                and deduction.date.month == month
            ),
            ZERO,
        ))

        team = getattr(employee, "team", None)
        supplemental = self.earnings.calculate(period_records, team, holidays)

        calendar_days = days_in_month(year, month)
        total_deductions = prorated + variable
        net = _money(gross - total_deductions + supplemental.total_additions)

        return Payslip(
            employee_id=employee_id,
            employee_code=getattr(employee, "code", "") or "",
            employee_name=getattr(employee, "name", "") or "",
            company=getattr(employee, "company", "") or "",
            team=getattr(team, "value", team) or "",
            year=year,
            month=month,
            gross=_money(gross),
            calendar_days=calendar_days,
            unpaid_days=unpaid_days,
            paid_days=max(calendar_days - unpaid_days, 0),
            prorated_deduction=prorated,
            variable_deductions=variable,
            total_deductions=total_deductions,
            overtime_pay=supplemental.overtime_pay,
            holiday_pay=supplemental.holiday_pay,
            week_off_pay=supplemental.week_off_pay,
            total_additions=supplemental.total_additions,
            total_overtime_hours=supplemental.total_overtime_hours,
            net=net,
            leave_balance=getattr(employee, "leave_balance", 0) or 0,
            **{name: _money(value) for name, value in components.items()},
        )


def compute_payslip(
    employee: Any,
    records: Iterable[AttendanceLike],
    deductions: Iterable[DeductionLike] = (),
    holidays: Optional[Iterable[date]] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Payslip:
    """Compute a payslip with the configured rates and proration divisor."""
    if holidays is None:
        holidays = settings.default_public_holidays
    return PayslipCalculator().calculate(employee, records, deductions, holidays, year, month)


def sum_payslips(payslips: Iterable[Payslip]) -> PayrollTotals:
    totals = PayrollTotals()
    for payslip in payslips:
        totals.add(payslip)
    return totals
