"""
ShiftSync - Organization Settings Service

Public holiday calendar, managed company list and About page profile.
"""

import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Set

from app.config import settings
from app.models.organization import AboutProfile, Company, PublicHoliday
from app.services.attendance_service import AttendanceService
from app.services.record_store import RecordStore
from app.utils.dates import DateLike, require_date
from app.utils.error_handling import (
    CompanyNotFoundException,
    DuplicateEntryException,
    HolidayNotFoundException,
    require_text,
)

logger = logging.getLogger(__name__)

ABOUT_DEFAULTS = {
    "name": "ShiftSync",
    "title": "Workforce Attendance & Payroll",
    "bio": "",
    "profile_image": None,
    "email": "",
    "contact_info": "",
}


class HolidayService:
    """Public holiday calendar."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.attendance = AttendanceService(store)

    async def add_holiday(
        self,
        day: DateLike,
        name: str,
        actor: Optional[str] = None,
    ) -> PublicHoliday:
        """
        Add a public holiday and stamp every active employee's attendance
        for the date as Public Holiday.

        Raises:
            DuplicateEntryException: If a holiday already exists on the date
        """
        day = require_date(day)
        name = require_text(name, "name")

        if await self.store.get_holiday_on(day):
            raise DuplicateEntryException("Public holiday", "date", day.isoformat())

        async with self.store.atomic():
            holiday = await self.store.put(PublicHoliday(date=day, name=name, updated_by=actor))
            stamped = await self.attendance.apply_public_holiday(day, actor=actor)

        logger.info(f"Public holiday {name} on {day} applied to {stamped} active employees")
        return holiday

    async def delete_holiday(self, holiday_id: uuid.UUID) -> None:
        """Remove a holiday; attendance already stamped is left as it is."""
        holiday = await self.store.get_holiday(holiday_id)
        if not holiday:
            raise HolidayNotFoundException(holiday_id)
        await self.store.delete(holiday)
        await self.store.commit()

    async def list_holidays(self, year: Optional[int] = None) -> List[PublicHoliday]:
        return await self.store.list_holidays(year)

    async def known_holiday_dates(self) -> Set[date]:
        """Stored holidays plus the configured defaults."""
        stored = {holiday.date for holiday in await self.store.list_holidays()}
        return stored | set(settings.default_public_holidays)


class CompanyService:
    """
    Managed company list.

    Employees hold the company name as a plain string; ``rename_company``
    only rewrites them when asked to cascade.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_companies(self) -> List[str]:
        return [company.name for company in await self.store.list_companies()]

    async def add_company(self, name: str) -> List[str]:
        """Add a company; adding an existing name is a no-op."""
        name = require_text(name, "name")
        if not await self.store.get_company(name):
            await self.store.put(Company(name=name))
            await self.store.commit()
        return await self.list_companies()

    async def rename_company(self, old_name: str, new_name: str, cascade: bool = False) -> List[str]:
        """
        Rename a company.

        Raises:
            CompanyNotFoundException: If ``old_name`` is not in the list
            DuplicateEntryException: If ``new_name`` already exists
        """
        new_name = require_text(new_name, "new_name")
        company = await self.store.get_company(old_name)
        if not company:
            raise CompanyNotFoundException(old_name)
        if new_name == old_name:
            return await self.list_companies()
        if await self.store.get_company(new_name):
            raise DuplicateEntryException("Company", "name", new_name)

        async with self.store.atomic():
            company.name = new_name
            await self.store.put(company)
            if cascade:
                for employee in await self.store.list_employees(company=old_name):
                    employee.company = new_name
                    await self.store.put(employee)

        logger.info(f"Company renamed from {old_name} to {new_name} (cascade={cascade})")
        return await self.list_companies()

    async def delete_company(self, name: str) -> List[str]:
        company = await self.store.get_company(name)
        if not company:
            raise CompanyNotFoundException(name)
        await self.store.delete(company)
        await self.store.commit()
        return await self.list_companies()

    async def seed_default_companies(self) -> int:
        """Populate the list on first start; an existing list is left alone."""
        if await self.store.list_companies():
            return 0
        for name in settings.default_companies:
            await self.store.put(Company(name=name))
        await self.store.commit()
        return len(settings.default_companies)


class AboutService:
    """Single About page profile."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_about(self) -> Dict[str, Any]:
        profile = await self.store.get_about()
        if profile is None:
            return dict(ABOUT_DEFAULTS)
        return {key: getattr(profile, key) for key in ABOUT_DEFAULTS}

    async def update_about(self, data: Dict[str, Any]) -> Dict[str, Any]:
        profile = await self.store.get_about()
        if profile is None:
            profile = AboutProfile(**ABOUT_DEFAULTS)
        for key, value in data.items():
            if key in ABOUT_DEFAULTS and value is not None:
                setattr(profile, key, value)
        await self.store.put(profile)
        await self.store.commit()
        return await self.get_about()
