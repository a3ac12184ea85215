"""
ShiftSync - Payroll Service

Loads salary, attendance, deductions and holidays through the record store
and hands them to the pure payslip calculator.

Payroll rules:
1. Gross = basic + housing + transport + other + air ticket + leave salary
2. Proration: gross / 30 per Absent or Unpaid Leave day
3. Variable deductions: deduction records dated in the payroll month
4. Additions: overtime, public-holiday and week-off pay (not for Office Staff)
5. Net = gross - proration - variable deductions + additions
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from app.models.employee import Team
from app.models.payroll import DeductionRecord, DeductionType
from app.services.organization_service import HolidayService
from app.services.payroll_calculators import (
    Payslip,
    PayslipCalculator,
    PayrollSummary,
    sum_payslips,
)
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, month_bounds, require_date
from app.utils.error_handling import (
    DeductionNotFoundException,
    EmployeeNotFoundException,
    InvalidAmountException,
    parse_choice,
)

logger = logging.getLogger(__name__)


class PayrollService:
    """
    Payroll service for payslips, payroll summaries and deductions.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.holidays = HolidayService(store)
        self.calculator = PayslipCalculator()

    # ===========================================
    # PAYSLIPS
    # ===========================================

    async def employee_payslip(self, employee_id: uuid.UUID, year: int, month: int) -> Payslip:
        """Payslip for one employee and calendar month."""
        employee = await self.store.get_employee(employee_id)
        if not employee:
            raise EmployeeNotFoundException(employee_id)

        start, end = month_bounds(year, month)
        records = await self.store.list_attendance(start, end, employee_id=employee.id)
        deductions = await self.store.list_deductions(employee.id, start, end)
        holidays = await self.holidays.known_holiday_dates()

        return self.calculator.calculate(employee, records, deductions, holidays, year, month)

    async def payroll_summary(
        self,
        year: int,
        month: int,
        company: Optional[str] = None,
        team: Optional[Team] = None,
    ) -> PayrollSummary:
        """
        Payslips of every active employee matching the filters plus
        field-wise totals.
        """
        employees = await self.store.list_employees(active_only=True, company=company, team=team)
        start, end = month_bounds(year, month)
        employee_ids = [employee.id for employee in employees]

        records_by_employee = {employee_id: [] for employee_id in employee_ids}
        for record in await self.store.list_attendance(start, end, employee_ids=employee_ids):
            records_by_employee[record.employee_id].append(record)

        deductions_by_employee = {employee_id: [] for employee_id in employee_ids}
        for deduction in await self.store.list_deductions(start=start, end=end):
            if deduction.employee_id in deductions_by_employee:
                deductions_by_employee[deduction.employee_id].append(deduction)

        holidays = await self.holidays.known_holiday_dates()

        payslips = [
            self.calculator.calculate(
                employee,
                records_by_employee[employee.id],
                deductions_by_employee[employee.id],
                holidays,
                year,
                month,
            )
            for employee in employees
        ]
        return PayrollSummary(year=year, month=month, payslips=payslips, totals=sum_payslips(payslips))

    # ===========================================
    # DEDUCTIONS
    # ===========================================

    async def add_deduction(
        self,
        employee_id: uuid.UUID,
        day: DateLike,
        deduction_type: Union[DeductionType, str],
        amount: Decimal,
        note: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> DeductionRecord:
        """
        Record a variable deduction.

        Raises:
            InvalidAmountException: If amount is not a positive number
            ValidationException: If the date or deduction type is invalid
            EmployeeNotFoundException: If the employee does not exist
        """
        try:
            amount = Decimal(str(amount).strip())
        except InvalidOperation:
            raise InvalidAmountException(amount) from None
        if not amount.is_finite() or amount <= 0:
            raise InvalidAmountException(amount, message="Deduction amount must be greater than zero")
        day = require_date(day)
        deduction_type = parse_choice(DeductionType, deduction_type, "deduction_type")
        if not await self.store.get_employee(employee_id):
            raise EmployeeNotFoundException(employee_id)

        deduction = await self.store.put(DeductionRecord(
            employee_id=employee_id,
            date=day,
            deduction_type=deduction_type,
            amount=amount,
            note=note,
            updated_by=actor,
        ))
        await self.store.commit()
        logger.info(f"Deduction of {amount} recorded for employee {employee_id}")
        return deduction

    async def list_deductions(
        self,
        employee_id: Optional[uuid.UUID] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[DeductionRecord]:
        start = end = None
        if year and month:
            start, end = month_bounds(year, month)
        elif year:
            start, end = month_bounds(year, 1)[0], month_bounds(year, 12)[1]
        return await self.store.list_deductions(employee_id, start, end)

    async def delete_deduction(self, deduction_id: uuid.UUID) -> None:
        deduction = await self.store.get_deduction(deduction_id)
        if not deduction:
            raise DeductionNotFoundException(deduction_id)
        await self.store.delete(deduction)
        await self.store.commit()
