"""
ShiftSync - Attendance Engine Tests
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from app.models.attendance import AttendanceStatus
from app.services.attendance_service import AttendanceService
from app.utils.error_handling import (
    EmployeeNotFoundException,
    ErrorCode,
    InvalidAmountException,
    ValidationException,
)


DAY = date(2026, 3, 10)


class TestMarkAttendance:

    @pytest.mark.asyncio
    async def test_present_derives_hours_and_check_in(self, store, test_employee):
        service = AttendanceService(store)
        record = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.PRESENT, actor="admin")

        assert record.hours_worked == Decimal("8")
        assert record.overtime_hours == Decimal("0")
        assert record.check_in_time is not None
        assert record.updated_by == "admin"

    @pytest.mark.asyncio
    async def test_non_present_has_zero_hours(self, store, test_employee):
        service = AttendanceService(store)
        record = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.SICK_LEAVE)

        assert record.hours_worked == Decimal("0")
        assert record.check_in_time is None

    @pytest.mark.asyncio
    async def test_upsert_keeps_one_record_per_day(self, store, test_employee):
        service = AttendanceService(store)
        first = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.PRESENT)
        second = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.ABSENT)

        records = await service.list_attendance(DAY, DAY, employee_id=test_employee.id)
        assert len(records) == 1
        assert second.id == first.id
        assert records[0].status == AttendanceStatus.ABSENT
        assert records[0].hours_worked == Decimal("0")

    @pytest.mark.asyncio
    async def test_omitted_fields_are_preserved(self, store, test_employee):
        service = AttendanceService(store)
        await service.mark_attendance(
            test_employee.id, DAY, AttendanceStatus.PRESENT,
            overtime_hours=Decimal("2.5"), attachment="data:application/pdf;base64,AAAA", note="Late shift",
        )
        record = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.WEEK_OFF)

        assert record.overtime_hours == Decimal("2.5")
        assert record.attachment == "data:application/pdf;base64,AAAA"
        assert record.note == "Late shift"

    @pytest.mark.asyncio
    async def test_check_in_stamped_only_once(self, store, test_employee):
        service = AttendanceService(store)
        first = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.PRESENT)
        stamped = first.check_in_time

        await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.ABSENT)
        again = await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.PRESENT)

        assert again.check_in_time == stamped

    @pytest.mark.asyncio
    async def test_accepts_status_code_string(self, store, test_employee):
        record = await AttendanceService(store).mark_attendance(test_employee.id, DAY, "PH")

        assert record.status == AttendanceStatus.PUBLIC_HOLIDAY

    @pytest.mark.asyncio
    async def test_negative_overtime_rejected(self, store, test_employee):
        with pytest.raises(InvalidAmountException):
            await AttendanceService(store).mark_attendance(
                test_employee.id, DAY, AttendanceStatus.PRESENT, overtime_hours=Decimal("-1"),
            )

    @pytest.mark.asyncio
    async def test_accepts_long_status_name(self, store, test_employee):
        record = await AttendanceService(store).mark_attendance(test_employee.id, DAY, "Sick Leave")

        assert record.status == AttendanceStatus.SICK_LEAVE

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, store, test_employee):
        with pytest.raises(ValidationException) as exc_info:
            await AttendanceService(store).mark_attendance(test_employee.id, DAY, "X")

        assert exc_info.value.code == ErrorCode.INVALID_STATUS
        assert exc_info.value.field == "status"

    @pytest.mark.asyncio
    async def test_non_iso_date_rejected(self, store, test_employee):
        with pytest.raises(ValidationException) as exc_info:
            await AttendanceService(store).mark_attendance(test_employee.id, "2025/12/01", "P")

        assert exc_info.value.code == ErrorCode.INVALID_FORMAT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overtime", ["abc", "NaN", "1.005", "1000"])
    async def test_invalid_overtime_rejected(self, store, test_employee, overtime):
        with pytest.raises(InvalidAmountException):
            await AttendanceService(store).mark_attendance(
                test_employee.id, DAY, AttendanceStatus.PRESENT, overtime_hours=overtime,
            )

        assert await AttendanceService(store).get_attendance(test_employee.id, DAY) is None

    @pytest.mark.asyncio
    async def test_unknown_employee(self, store):
        with pytest.raises(EmployeeNotFoundException):
            await AttendanceService(store).mark_attendance(uuid.uuid4(), DAY, AttendanceStatus.PRESENT)


class TestDeleteAttendance:

    @pytest.mark.asyncio
    async def test_delete_existing(self, store, test_employee):
        service = AttendanceService(store)
        await service.mark_attendance(test_employee.id, DAY, AttendanceStatus.PRESENT)

        assert await service.delete_attendance(test_employee.id, DAY) is True
        assert await service.get_attendance(test_employee.id, DAY) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, store, test_employee):
        assert await AttendanceService(store).delete_attendance(test_employee.id, DAY) is False


class TestCopyDay:

    @pytest.mark.asyncio
    async def test_copies_every_record(self, store, test_employee, office_employee):
        service = AttendanceService(store)
        await service.mark_attendance(
            test_employee.id, DAY, AttendanceStatus.PRESENT, overtime_hours=Decimal("1"),
        )
        await service.mark_attendance(office_employee.id, DAY, AttendanceStatus.ANNUAL_LEAVE)
        target = date(2026, 3, 11)
        await service.mark_attendance(test_employee.id, target, AttendanceStatus.ABSENT)
        await service.mark_attendance(
            office_employee.id, target, AttendanceStatus.PRESENT, attachment="stale-ot-proof",
        )

        copied = await service.copy_day(DAY, target, actor="supervisor")

        assert copied == 2
        copied_record = await service.get_attendance(test_employee.id, target)
        assert copied_record.status == AttendanceStatus.PRESENT
        assert copied_record.overtime_hours == Decimal("1")
        assert copied_record.note == "Copied from 2026-03-10"
        assert copied_record.updated_by == "supervisor"
        office_record = await service.get_attendance(office_employee.id, target)
        assert office_record.status == AttendanceStatus.ANNUAL_LEAVE
        assert office_record.attachment is None
        assert office_record.check_in_time is None
        assert office_record.hours_worked == Decimal("0")

    @pytest.mark.asyncio
    async def test_empty_source_copies_nothing(self, store, test_employee):
        service = AttendanceService(store)
        target = date(2026, 3, 11)
        await service.mark_attendance(test_employee.id, target, AttendanceStatus.ABSENT)

        assert await service.copy_day(DAY, target) == 0
        record = await service.get_attendance(test_employee.id, target)
        assert record.status == AttendanceStatus.ABSENT


class TestMonthGrid:

    @pytest.mark.asyncio
    async def test_grid_keyed_by_employee_and_date(self, store, test_employee):
        service = AttendanceService(store)
        await service.mark_attendance(test_employee.id, date(2026, 3, 1), AttendanceStatus.PRESENT)
        await service.mark_attendance(test_employee.id, date(2026, 3, 31), AttendanceStatus.WEEK_OFF)
        await service.mark_attendance(test_employee.id, date(2026, 4, 1), AttendanceStatus.PRESENT)

        grid = await service.month_grid(2026, 3)

        assert grid.start == date(2026, 3, 1)
        assert grid.end == date(2026, 3, 31)
        assert set(grid.records[test_employee.id]) == {date(2026, 3, 1), date(2026, 3, 31)}
