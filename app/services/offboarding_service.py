"""
ShiftSync - Offboarding & Rehire Service

Offboarding flips an employee to Inactive and stores the exit details with a
recomputed net settlement. Rehire flips the employee back to Active, resets
the joining date to the rehire date (the original joining date is not kept)
and clears the offboarding details.
"""

import logging
import uuid
from datetime import date
from typing import Any, Dict, Mapping, Optional

from app.models.employee import Employee, EmployeeStatus, ExitType
from app.services.payroll_calculators import normalize_settlement
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, require_date
from app.utils.error_handling import EmployeeNotFoundException, ValidationException, parse_choice

logger = logging.getLogger(__name__)


class OffboardingService:
    """Employee exit and re-entry."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def _get_employee(self, employee_id: uuid.UUID) -> Employee:
        employee = await self.store.get_employee(employee_id)
        if not employee:
            raise EmployeeNotFoundException(employee_id)
        return employee

    async def offboard(
        self,
        employee_id: uuid.UUID,
        details: Mapping[str, Any],
        actor: Optional[str] = None,
    ) -> Employee:
        """
        Offboard an employee.

        ``details`` carries exit_type, exit_date, reason, the settlement
        figures (gratuity, leave_encashment, salary_dues, other_dues,
        deductions), assets_returned, notes and optional documents.
        ``net_settlement`` is always recomputed from the figures.

        Raises:
            EmployeeNotFoundException: If the employee does not exist
            ValidationException: If the exit type or exit date is invalid
            InvalidAmountException: If a settlement figure is not a number
        """
        employee = await self._get_employee(employee_id)

        stored: Dict[str, Any] = normalize_settlement(details)
        stored["exit_type"] = parse_choice(
            ExitType, stored.get("exit_type") or ExitType.RESIGNATION, "exit_type",
        ).value
        exit_date = stored.get("exit_date") or date.today()
        stored["exit_date"] = require_date(exit_date, "exit_date").isoformat()
        stored.setdefault("reason", "")
        stored["assets_returned"] = bool(stored.get("assets_returned", False))
        stored.setdefault("notes", "")
        stored["documents"] = list(stored.get("documents") or [])
        if actor:
            stored["processed_by"] = actor

        employee.set_status(EmployeeStatus.INACTIVE)
        employee.offboarding_details = stored
        await self.store.put(employee)
        await self.store.commit()

        logger.info(
            f"Employee {employee.code} offboarded ({stored['exit_type']}), "
            f"net settlement {stored['net_settlement']:.2f}"
        )
        return employee

    async def rehire(
        self,
        employee_id: uuid.UUID,
        rejoining_date: DateLike,
        reason: Optional[str] = None,
    ) -> Employee:
        """
        Rehire an employee.

        Rehiring an employee who is already active is allowed and simply
        re-stamps the joining and rejoining data.
        """
        employee = await self._get_employee(employee_id)
        if rejoining_date is None:
            raise ValidationException("Rejoining date is required", field="rejoining_date")
        rejoining = require_date(rejoining_date, "rejoining_date")

        if employee.active:
            logger.warning(f"Rehiring employee {employee.code} who is already active")

        employee.set_status(EmployeeStatus.ACTIVE)
        employee.joining_date = rejoining
        employee.offboarding_details = None
        employee.rejoining_date = rejoining
        employee.rejoining_reason = reason or ""
        await self.store.put(employee)
        await self.store.commit()

        logger.info(f"Employee {employee.code} rehired on {rejoining}")
        return employee
