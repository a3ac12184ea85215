"""
ShiftSync - Holidays, Companies and About Page Tests
"""

import uuid
from datetime import date

import pytest

from app.config import settings
from app.models.attendance import AttendanceStatus
from app.services.attendance_service import AttendanceService
from app.services.organization_service import AboutService, CompanyService, HolidayService
from app.utils.error_handling import (
    CompanyNotFoundException,
    DuplicateEntryException,
    HolidayNotFoundException,
    MissingFieldException,
)


NATIONAL_DAY = date(2026, 12, 2)


class TestPublicHolidays:

    @pytest.mark.asyncio
    async def test_holiday_stamps_active_employees(self, store, test_employee, office_employee, inactive_employee):
        attendance = AttendanceService(store)
        await attendance.mark_attendance(test_employee.id, NATIONAL_DAY, AttendanceStatus.PRESENT)

        holiday = await HolidayService(store).add_holiday(NATIONAL_DAY, "National Day", actor="admin")

        assert holiday.name == "National Day"
        for employee in (test_employee, office_employee):
            record = await attendance.get_attendance(employee.id, NATIONAL_DAY)
            assert record.status == AttendanceStatus.PUBLIC_HOLIDAY
            assert record.updated_by == "admin"
        assert await attendance.get_attendance(inactive_employee.id, NATIONAL_DAY) is None

    @pytest.mark.asyncio
    async def test_duplicate_date_rejected(self, store):
        service = HolidayService(store)
        await service.add_holiday(NATIONAL_DAY, "National Day")

        with pytest.raises(DuplicateEntryException):
            await service.add_holiday(NATIONAL_DAY, "Another name")

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, store):
        with pytest.raises(MissingFieldException):
            await HolidayService(store).add_holiday(NATIONAL_DAY, "  ")

    @pytest.mark.asyncio
    async def test_delete_keeps_stamped_attendance(self, store, test_employee):
        service = HolidayService(store)
        holiday = await service.add_holiday(NATIONAL_DAY, "National Day")

        await service.delete_holiday(holiday.id)

        assert await service.list_holidays() == []
        record = await AttendanceService(store).get_attendance(test_employee.id, NATIONAL_DAY)
        assert record.status == AttendanceStatus.PUBLIC_HOLIDAY

    @pytest.mark.asyncio
    async def test_delete_unknown(self, store):
        with pytest.raises(HolidayNotFoundException):
            await HolidayService(store).delete_holiday(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_list_by_year(self, store):
        service = HolidayService(store)
        await service.add_holiday(date(2025, 12, 25), "Christmas")
        await service.add_holiday(NATIONAL_DAY, "National Day")

        assert [h.name for h in await service.list_holidays(2026)] == ["National Day"]
        assert len(await service.list_holidays()) == 2

    @pytest.mark.asyncio
    async def test_known_dates_include_defaults(self, store):
        service = HolidayService(store)
        await service.add_holiday(NATIONAL_DAY, "National Day")

        known = await service.known_holiday_dates()

        assert NATIONAL_DAY in known
        assert set(settings.default_public_holidays) <= known


class TestCompanies:

    @pytest.mark.asyncio
    async def test_seed_only_once(self, store):
        service = CompanyService(store)

        assert await service.seed_default_companies() == len(settings.default_companies)
        assert await service.seed_default_companies() == 0
        assert len(await service.list_companies()) == len(settings.default_companies)

    @pytest.mark.asyncio
    async def test_add_is_idempotent(self, store):
        service = CompanyService(store)
        await service.add_company("Salina Spa")
        companies = await service.add_company("Salina Spa")

        assert companies == ["Salina Spa"]

    @pytest.mark.asyncio
    async def test_rename_without_cascade_leaves_employees(self, store, test_employee):
        service = CompanyService(store)
        old_name = test_employee.company
        await service.add_company(old_name)

        companies = await service.rename_company(old_name, "Al Reem Group")

        assert companies == ["Al Reem Group"]
        employee = await store.get_employee(test_employee.id)
        assert employee.company == old_name

    @pytest.mark.asyncio
    async def test_rename_with_cascade_updates_employees(self, store, test_employee):
        service = CompanyService(store)
        old_name = test_employee.company
        await service.add_company(old_name)

        await service.rename_company(old_name, "Al Reem Group", cascade=True)

        employee = await store.get_employee(test_employee.id)
        assert employee.company == "Al Reem Group"

    @pytest.mark.asyncio
    async def test_rename_to_existing_name(self, store):
        service = CompanyService(store)
        await service.add_company("A")
        await service.add_company("B")

        with pytest.raises(DuplicateEntryException):
            await service.rename_company("A", "B")

    @pytest.mark.asyncio
    async def test_rename_and_delete_unknown(self, store):
        service = CompanyService(store)

        with pytest.raises(CompanyNotFoundException):
            await service.rename_company("Missing", "New")
        with pytest.raises(CompanyNotFoundException):
            await service.delete_company("Missing")

    @pytest.mark.asyncio
    async def test_delete(self, store):
        service = CompanyService(store)
        await service.add_company("A")

        assert await service.delete_company("A") == []


class TestAboutProfile:

    @pytest.mark.asyncio
    async def test_defaults_before_first_update(self, store):
        about = await AboutService(store).get_about()

        assert about["name"] == "ShiftSync"
        assert about["profile_image"] is None

    @pytest.mark.asyncio
    async def test_update_is_partial(self, store):
        service = AboutService(store)
        await service.update_about({"bio": "HR lead", "email": "hr@example.com"})
        about = await service.update_about({"title": "HR Manager"})

        assert about["bio"] == "HR lead"
        assert about["title"] == "HR Manager"
        assert about["email"] == "hr@example.com"
