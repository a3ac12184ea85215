"""
ShiftSync - Leave Lifecycle Tests
"""

import uuid
from datetime import date

import pytest

from app.models.attendance import AttendanceStatus
from app.models.leave import LeaveStatus
from app.services.attendance_service import AttendanceService
from app.services.leave_service import LeaveService
from app.utils.error_handling import (
    ConflictException,
    EmployeeNotFoundException,
    ErrorCode,
    InvalidDateRangeException,
    LeaveRequestNotFoundException,
    MissingFieldException,
    ValidationException,
)


START = date(2026, 3, 1)
END = date(2026, 3, 3)


async def _submit(store, employee, leave_type=AttendanceStatus.ANNUAL_LEAVE, start=START, end=END):
    return await LeaveService(store).submit(
        employee.id, leave_type, start, end, "Family visit", actor="hr",
    )


class TestSubmit:

    @pytest.mark.asyncio
    async def test_new_request_is_pending(self, store, test_employee):
        request = await _submit(store, test_employee)

        assert request.status == LeaveStatus.PENDING
        assert request.applied_on is not None
        assert request.decided_at is None
        assert request.day_count == 3

    @pytest.mark.asyncio
    async def test_reversed_range_rejected(self, store, test_employee):
        with pytest.raises(InvalidDateRangeException):
            await _submit(store, test_employee, start=END, end=START)

    @pytest.mark.asyncio
    async def test_blank_reason_rejected(self, store, test_employee):
        with pytest.raises(MissingFieldException):
            await LeaveService(store).submit(
                test_employee.id, AttendanceStatus.SICK_LEAVE, START, END, "   ",
            )

    @pytest.mark.asyncio
    async def test_non_leave_type_rejected(self, store, test_employee):
        with pytest.raises(ValidationException) as exc_info:
            await _submit(store, test_employee, leave_type=AttendanceStatus.PRESENT)
        assert exc_info.value.code == ErrorCode.INVALID_STATUS

    @pytest.mark.asyncio
    async def test_long_leave_type_name_accepted(self, store, test_employee):
        request = await _submit(store, test_employee, leave_type="SickLeave")

        assert request.leave_type == AttendanceStatus.SICK_LEAVE

    @pytest.mark.asyncio
    async def test_unknown_leave_type_rejected(self, store, test_employee):
        with pytest.raises(ValidationException) as exc_info:
            await _submit(store, test_employee, leave_type="Vacation")
        assert exc_info.value.code == ErrorCode.INVALID_STATUS
        assert exc_info.value.field == "leave_type"

    @pytest.mark.asyncio
    async def test_malformed_date_rejected(self, store, test_employee):
        with pytest.raises(ValidationException) as exc_info:
            await _submit(store, test_employee, start="01/03/2026")
        assert exc_info.value.code == ErrorCode.INVALID_FORMAT
        assert exc_info.value.field == "start_date"

    @pytest.mark.asyncio
    async def test_unknown_employee(self, store):
        with pytest.raises(EmployeeNotFoundException):
            await LeaveService(store).submit(
                uuid.uuid4(), AttendanceStatus.ANNUAL_LEAVE, START, END, "Trip",
            )


class TestApproval:

    @pytest.mark.asyncio
    async def test_annual_leave_marks_days_and_deducts_balance(self, store, test_employee):
        request = await _submit(store, test_employee)
        attendance = AttendanceService(store)
        await attendance.mark_attendance(test_employee.id, START, AttendanceStatus.PRESENT)

        decided = await LeaveService(store).set_status(request.id, LeaveStatus.APPROVED, actor="admin")

        assert decided.status == LeaveStatus.APPROVED
        assert decided.decided_at is not None
        records = await attendance.list_attendance(START, END, employee_id=test_employee.id)
        assert [r.status for r in records] == [AttendanceStatus.ANNUAL_LEAVE] * 3
        employee = await store.get_employee(test_employee.id)
        assert employee.leave_balance == 27

    @pytest.mark.asyncio
    async def test_balance_never_goes_negative(self, store, employee_factory):
        employee = await employee_factory("10002", leave_balance=2)
        request = await _submit(store, employee, leave_type=AttendanceStatus.SICK_LEAVE)

        await LeaveService(store).set_status(request.id, LeaveStatus.APPROVED)

        refreshed = await store.get_employee(employee.id)
        assert refreshed.leave_balance == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("leave_type", [AttendanceStatus.UNPAID_LEAVE, AttendanceStatus.EMERGENCY_LEAVE])
    async def test_unpaid_and_emergency_leave_keep_balance(self, store, test_employee, leave_type):
        request = await _submit(store, test_employee, leave_type=leave_type)

        await LeaveService(store).set_status(request.id, LeaveStatus.APPROVED)

        employee = await store.get_employee(test_employee.id)
        assert employee.leave_balance == 30
        record = await AttendanceService(store).get_attendance(test_employee.id, START)
        assert record.status == leave_type


class TestRejectionAndRedecision:

    @pytest.mark.asyncio
    async def test_rejection_has_no_side_effects(self, store, test_employee):
        request = await _submit(store, test_employee)

        decided = await LeaveService(store).set_status(request.id, LeaveStatus.REJECTED)

        assert decided.status == LeaveStatus.REJECTED
        assert await AttendanceService(store).list_attendance(START, END) == []
        employee = await store.get_employee(test_employee.id)
        assert employee.leave_balance == 30

    @pytest.mark.asyncio
    async def test_same_status_again_is_noop(self, store, test_employee):
        service = LeaveService(store)
        request = await _submit(store, test_employee)
        await service.set_status(request.id, LeaveStatus.APPROVED)

        await service.set_status(request.id, LeaveStatus.APPROVED)

        employee = await store.get_employee(test_employee.id)
        assert employee.leave_balance == 27

    @pytest.mark.asyncio
    async def test_decided_request_cannot_flip(self, store, test_employee):
        service = LeaveService(store)
        request = await _submit(store, test_employee)
        await service.set_status(request.id, LeaveStatus.REJECTED)

        with pytest.raises(ConflictException) as exc_info:
            await service.set_status(request.id, LeaveStatus.APPROVED)
        assert exc_info.value.code == ErrorCode.ALREADY_PROCESSED

    @pytest.mark.asyncio
    async def test_back_to_pending_rejected(self, store, test_employee):
        request = await _submit(store, test_employee)

        with pytest.raises(ValidationException):
            await LeaveService(store).set_status(request.id, LeaveStatus.PENDING)

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, store, test_employee):
        request = await _submit(store, test_employee)

        with pytest.raises(ValidationException) as exc_info:
            await LeaveService(store).set_status(request.id, "Maybe")
        assert exc_info.value.code == ErrorCode.INVALID_STATUS
        assert request.status == LeaveStatus.PENDING

    @pytest.mark.asyncio
    async def test_unknown_request(self, store):
        with pytest.raises(LeaveRequestNotFoundException):
            await LeaveService(store).set_status(uuid.uuid4(), LeaveStatus.APPROVED)


class TestListing:

    @pytest.mark.asyncio
    async def test_filter_by_status(self, store, test_employee):
        service = LeaveService(store)
        first = await _submit(store, test_employee)
        await _submit(store, test_employee, start=date(2026, 4, 1), end=date(2026, 4, 1))
        await service.set_status(first.id, LeaveStatus.APPROVED)

        pending = await service.list_leave_requests(status=LeaveStatus.PENDING)
        approved = await service.list_leave_requests(status=LeaveStatus.APPROVED)

        assert len(pending) == 1
        assert [r.id for r in approved] == [first.id]
