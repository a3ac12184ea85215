"""
ShiftSync - Leave Lifecycle Service

Leave requests move once from Pending to Approved or Rejected.

Approval writes the leave type into the timesheet for every day of the
inclusive range (overwriting whatever was marked) and, for Annual and Sick
leave, decrements the employee's leave balance by the day count, never below
zero. Rejection changes the request status and nothing else.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from app.models.attendance import AttendanceStatus, LEAVE_STATUSES
from app.models.leave import LeaveRequest, LeaveStatus
from app.services.attendance_service import AttendanceService
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, inclusive_days, iter_days, require_date
from app.utils.error_handling import (
    ConflictException,
    EmployeeNotFoundException,
    ErrorCode,
    InvalidDateRangeException,
    LeaveRequestNotFoundException,
    MissingFieldException,
    ValidationException,
    parse_choice,
    require_text,
)

logger = logging.getLogger(__name__)

# Leave types that consume the leave balance
BALANCE_LEAVE_TYPES = frozenset({
    AttendanceStatus.ANNUAL_LEAVE,
    AttendanceStatus.SICK_LEAVE,
})


class LeaveService:
    """Leave request lifecycle."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.attendance = AttendanceService(store)

    async def submit(
        self,
        employee_id: Optional[uuid.UUID],
        leave_type: Union[AttendanceStatus, str],
        start_date: DateLike,
        end_date: DateLike,
        reason: Optional[str],
        actor: Optional[str] = None,
    ) -> LeaveRequest:
        """
        Create a Pending leave request.

        Raises:
            MissingFieldException: If employee_id or reason is empty
            ValidationException: If the type is not a leave status or a date
                is malformed
            InvalidDateRangeException: If start_date is after end_date
            EmployeeNotFoundException: If the employee does not exist
        """
        if not employee_id:
            raise MissingFieldException("employee_id")
        reason = require_text(reason, "reason")

        leave_type = parse_choice(AttendanceStatus, leave_type, "leave_type", parser=AttendanceStatus.from_token)
        if leave_type not in LEAVE_STATUSES:
            raise ValidationException(
                f"'{leave_type.value}' is not a leave type",
                field="leave_type",
                code=ErrorCode.INVALID_STATUS,
            )

        start = require_date(start_date, "start_date")
        end = require_date(end_date, "end_date")
        if start > end:
            raise InvalidDateRangeException(start, end)

        if not await self.store.get_employee(employee_id):
            raise EmployeeNotFoundException(employee_id)

        request = await self.store.put(LeaveRequest(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            reason=reason,
            status=LeaveStatus.PENDING,
            applied_on=datetime.now(timezone.utc),
            updated_by=actor,
        ))
        await self.store.commit()
        logger.info(f"Leave request {request.id} submitted for employee {employee_id}")
        return request

    async def set_status(
        self,
        request_id: uuid.UUID,
        new_status: Union[LeaveStatus, str],
        actor: Optional[str] = None,
    ) -> LeaveRequest:
        """
        Decide a leave request.

        Re-sending the status a request already has is a no-op. A decided
        request cannot be moved to the other terminal status.

        Raises:
            LeaveRequestNotFoundException: If the request does not exist
            ValidationException: If the target status is Pending or unknown
            ConflictException: If the request was already decided differently
        """
        new_status = parse_choice(LeaveStatus, new_status, "status")
        if not new_status.is_terminal:
            raise ValidationException(
                "A leave request can only be set to Approved or Rejected",
                field="status",
                code=ErrorCode.INVALID_STATUS,
            )

        request = await self.store.get_leave_request(request_id)
        if not request:
            raise LeaveRequestNotFoundException(request_id)

        current = LeaveStatus(request.status)
        if current == new_status:
            return request
        if current.is_terminal:
            raise ConflictException(
                f"Leave request is already {current.value}",
                resource_type="LeaveRequest",
                code=ErrorCode.ALREADY_PROCESSED,
            )

        async with self.store.atomic():
            request.status = new_status
            request.decided_at = datetime.now(timezone.utc)
            request.updated_by = actor
            await self.store.put(request)

            if new_status == LeaveStatus.APPROVED:
                await self._apply_approval(request, actor)

        logger.info(f"Leave request {request.id} {new_status.value.lower()}")
        return request

    async def _apply_approval(self, request: LeaveRequest, actor: Optional[str]) -> None:
        employee = await self.store.get_employee(request.employee_id)
        if not employee:
            raise EmployeeNotFoundException(request.employee_id)

        for day in iter_days(request.start_date, request.end_date):
            await self.attendance.upsert_attendance(
                employee.id, day, request.leave_type, actor=actor, employee=employee,
            )

        if AttendanceStatus(request.leave_type) in BALANCE_LEAVE_TYPES:
            days = inclusive_days(request.start_date, request.end_date)
            employee.leave_balance = max(0, (employee.leave_balance or 0) - days)
            await self.store.put(employee)

    async def get_leave_request(self, request_id: uuid.UUID) -> LeaveRequest:
        request = await self.store.get_leave_request(request_id)
        if not request:
            raise LeaveRequestNotFoundException(request_id)
        return request

    async def list_leave_requests(
        self,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[LeaveRequest]:
        return await self.store.list_leave_requests(status=status, employee_id=employee_id)
