"""
ShiftSync - Supplemental Earnings Calculator

Overtime, public-holiday and week-off pay computed on top of fixed salary.

Rules:
- Every team except Office Staff is eligible; ineligible teams earn nothing
  from any of the three buckets and report zero overtime hours.
- Overtime pay = total overtime hours x hourly OT rate (5/hour).
- Holiday pay = flat bonus (50) per Present record dated on a known holiday.
- Week-off pay = hours worked (8 when unset) x week-off rate (5/hour) per
  Present record dated on the week-off weekday (Sunday).

The buckets are independent and additive: a Present record on a holiday
that is also a Sunday earns both the holiday bonus and week-off pay.
"""

from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional, Protocol, Union

from app.config import settings
from app.models.attendance import AttendanceStatus
from app.models.employee import Team


ZERO = Decimal("0")


class AttendanceLike(Protocol):
    date: date
    status: AttendanceStatus
    hours_worked: Optional[Decimal]
    overtime_hours: Optional[Decimal]


@dataclass(frozen=True)
class EarningsRates:
    """Rates applied by the calculator."""
    hourly_ot_rate: Decimal = Decimal("5")
    week_off_hourly_rate: Decimal = Decimal("5")
    holiday_bonus_flat: Decimal = Decimal("50")
    week_off_weekday: int = 6  # Sunday
    default_hours: Decimal = Decimal("8")

    @classmethod
    def from_settings(cls) -> "EarningsRates":
        return cls(
            hourly_ot_rate=settings.hourly_ot_rate,
            week_off_hourly_rate=settings.week_off_hourly_rate,
            holiday_bonus_flat=settings.holiday_bonus_flat,
            week_off_weekday=settings.week_off_weekday,
            default_hours=settings.standard_shift_hours,
        )


@dataclass(frozen=True)
class SupplementalEarnings:
    """Result of the supplemental earnings calculation."""
    overtime_pay: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    week_off_pay: Decimal = ZERO
    total_overtime_hours: Decimal = ZERO

    @property
    def total_additions(self) -> Decimal:
        return self.overtime_pay + self.holiday_pay + self.week_off_pay

    def to_dict(self) -> Dict[str, Any]:
        data = {key: float(value) for key, value in asdict(self).items()}
        data["total_additions"] = float(self.total_additions)
        return data


def is_overtime_eligible(team: Union[Team, str, None]) -> bool:
    """Every team except Office Staff is eligible."""
    if team is None:
        return True
    value = team.value if isinstance(team, Team) else str(team)
    return value != Team.OFFICE_STAFF.value


def _money(value: Decimal) -> Decimal:
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


class EarningsCalculator:
    """Supplemental earnings calculator."""

    def __init__(self, rates: Optional[EarningsRates] = None):
        self.rates = rates or EarningsRates()

    def calculate(
        self,
        records: Iterable[AttendanceLike],
        team: Union[Team, str, None],
        holidays: Iterable[date] = (),
    ) -> SupplementalEarnings:
        """
        Compute supplemental earnings for a set of attendance records.

        Args:
            records: Attendance records of one employee
            team: The employee's team
            holidays: Known public holiday dates

        Returns:
            SupplementalEarnings (all zero for ineligible teams)
        """
        if not is_overtime_eligible(team):
            return SupplementalEarnings()

        holiday_dates = frozenset(holidays)
        overtime_hours = ZERO
        holiday_pay = ZERO
        week_off_pay = ZERO

        for record in records:
            overtime_hours += _decimal(record.overtime_hours)

            if AttendanceStatus(record.status) != AttendanceStatus.PRESENT:
                continue

            if record.date in holiday_dates:
                holiday_pay += self.rates.holiday_bonus_flat

            if record.date.weekday() == self.rates.week_off_weekday:
                hours = _decimal(record.hours_worked) or self.rates.default_hours
                week_off_pay += hours * self.rates.week_off_hourly_rate

        return SupplementalEarnings(
            overtime_pay=_money(overtime_hours * self.rates.hourly_ot_rate),
            holiday_pay=_money(holiday_pay),
            week_off_pay=_money(week_off_pay),
            total_overtime_hours=overtime_hours,
        )


def compute_supplemental_earnings(
    records: Iterable[AttendanceLike],
    team: Union[Team, str, None],
    holidays: Optional[Iterable[date]] = None,
    rates: Optional[EarningsRates] = None,
) -> SupplementalEarnings:
    """
    Compute overtime, holiday and week-off pay.

    When ``holidays`` is omitted the configured default public holidays are
    used.
    """
    if holidays is None:
        holidays = settings.default_public_holidays
    calculator = EarningsCalculator(rates or EarningsRates.from_settings())
    return calculator.calculate(records, team, holidays)
