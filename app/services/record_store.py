"""
ShiftSync - Record Store

Repository over the persisted collections (employees, attendance, leave
requests, holidays, companies, deductions, users, about profile).

One ``RecordStore`` wraps one ``AsyncSession`` and is handed explicitly to
every engine and lifecycle service. It holds no business rules: only
get / list / put / delete per entity plus the date-range queries the core
needs. Writes are staged with ``put``/``delete`` and made durable by
``commit``; multi-entity operations use ``atomic()`` so that every sub-write
lands together or none does.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Callable, Iterable, List, Optional, TypeVar

from sqlalchemy import select, and_, or_, extract
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.attendance import AttendanceRecord
from app.models.base import BaseModel
from app.models.employee import Employee, EmployeeStatus, Team
from app.models.leave import LeaveRequest, LeaveStatus
from app.models.organization import AboutProfile, Company, PublicHoliday
from app.models.payroll import DeductionRecord
from app.models.user import SystemUser

logger = logging.getLogger(__name__)

IdProvider = Callable[[], uuid.UUID]

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordStore:
    """Repository over a single database session."""

    def __init__(self, db: AsyncSession, id_provider: Optional[IdProvider] = None):
        self.db = db
        self.id_provider: IdProvider = id_provider or uuid.uuid4

    # ===========================================
    # UNIT OF WORK
    # ===========================================

    def new_id(self) -> uuid.UUID:
        return self.id_provider()

    async def put(self, entity: ModelT) -> ModelT:
        """Stage an insert or update; new entities get an id from the provider."""
        if entity.id is None:
            entity.id = self.new_id()
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def delete(self, entity: BaseModel) -> None:
        await self.db.delete(entity)
        await self.db.flush()

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def refresh(self, entity: BaseModel) -> None:
        await self.db.refresh(entity)

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator["RecordStore"]:
        """Commit every write made inside the block, or roll all of them back."""
        try:
            yield self
            await self.db.commit()
        except Exception:
            logger.error("Rolling back incomplete multi-record operation", exc_info=True)
            await self.db.rollback()
            raise

    # ===========================================
    # EMPLOYEES
    # ===========================================

    async def get_employee(self, employee_id: uuid.UUID) -> Optional[Employee]:
        return await self.db.get(Employee, employee_id)

    async def get_employee_by_code(self, code: str) -> Optional[Employee]:
        result = await self.db.execute(select(Employee).where(Employee.code == code))
        return result.scalar_one_or_none()

    async def list_employees(
        self,
        active_only: bool = False,
        company: Optional[str] = None,
        team: Optional[Team] = None,
        status: Optional[EmployeeStatus] = None,
        search: Optional[str] = None,
    ) -> List[Employee]:
        query = select(Employee)

        if active_only:
            query = query.where(Employee.active.is_(True))
        if company:
            query = query.where(Employee.company == company)
        if team:
            query = query.where(Employee.team == team)
        if status:
            query = query.where(Employee.status == status)
        if search:
            search_term = f"%{search}%"
            query = query.where(
                or_(
                    Employee.name.ilike(search_term),
                    Employee.code.ilike(search_term),
                    Employee.designation.ilike(search_term),
                )
            )

        result = await self.db.execute(query.order_by(Employee.code))
        return list(result.scalars().all())

    # ===========================================
    # ATTENDANCE
    # ===========================================

    async def get_attendance(self, employee_id: uuid.UUID, day: date) -> Optional[AttendanceRecord]:
        result = await self.db.execute(
            select(AttendanceRecord).where(
                and_(
                    AttendanceRecord.employee_id == employee_id,
                    AttendanceRecord.date == day,
                )
            )
        )
        return result.scalar_one_or_none()

    async def list_attendance(
        self,
        start: date,
        end: date,
        employee_id: Optional[uuid.UUID] = None,
        employee_ids: Optional[Iterable[uuid.UUID]] = None,
    ) -> List[AttendanceRecord]:
        """Attendance records with start <= date <= end."""
        query = select(AttendanceRecord).where(
            and_(AttendanceRecord.date >= start, AttendanceRecord.date <= end)
        )
        if employee_id is not None:
            query = query.where(AttendanceRecord.employee_id == employee_id)
        if employee_ids is not None:
            query = query.where(AttendanceRecord.employee_id.in_(list(employee_ids)))

        result = await self.db.execute(
            query.order_by(AttendanceRecord.date, AttendanceRecord.employee_id)
        )
        return list(result.scalars().all())

    async def list_attendance_on(self, day: date) -> List[AttendanceRecord]:
        return await self.list_attendance(day, day)

    # ===========================================
    # LEAVE REQUESTS
    # ===========================================

    async def get_leave_request(self, request_id: uuid.UUID) -> Optional[LeaveRequest]:
        return await self.db.get(LeaveRequest, request_id)

    async def list_leave_requests(
        self,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[LeaveRequest]:
        query = select(LeaveRequest)
        if status:
            query = query.where(LeaveRequest.status == status)
        if employee_id:
            query = query.where(LeaveRequest.employee_id == employee_id)

        result = await self.db.execute(query.order_by(LeaveRequest.applied_on.desc()))
        return list(result.scalars().all())

    # ===========================================
    # PUBLIC HOLIDAYS
    # ===========================================

    async def get_holiday(self, holiday_id: uuid.UUID) -> Optional[PublicHoliday]:
        return await self.db.get(PublicHoliday, holiday_id)

    async def get_holiday_on(self, day: date) -> Optional[PublicHoliday]:
        result = await self.db.execute(select(PublicHoliday).where(PublicHoliday.date == day))
        return result.scalar_one_or_none()

    async def list_holidays(self, year: Optional[int] = None) -> List[PublicHoliday]:
        query = select(PublicHoliday)
        if year:
            query = query.where(extract("year", PublicHoliday.date) == year)
        result = await self.db.execute(query.order_by(PublicHoliday.date))
        return list(result.scalars().all())

    # ===========================================
    # COMPANIES
    # ===========================================

    async def get_company(self, name: str) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.name == name))
        return result.scalar_one_or_none()

    async def list_companies(self) -> List[Company]:
        result = await self.db.execute(select(Company).order_by(Company.created_at, Company.name))
        return list(result.scalars().all())

    # ===========================================
    # DEDUCTIONS
    # ===========================================

    async def get_deduction(self, deduction_id: uuid.UUID) -> Optional[DeductionRecord]:
        return await self.db.get(DeductionRecord, deduction_id)

    async def list_deductions(
        self,
        employee_id: Optional[uuid.UUID] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DeductionRecord]:
        query = select(DeductionRecord)
        if employee_id:
            query = query.where(DeductionRecord.employee_id == employee_id)
        if start:
            query = query.where(DeductionRecord.date >= start)
        if end:
            query = query.where(DeductionRecord.date <= end)

        result = await self.db.execute(query.order_by(DeductionRecord.date))
        return list(result.scalars().all())

    # ===========================================
    # SYSTEM USERS
    # ===========================================

    async def get_user(self, username: str) -> Optional[SystemUser]:
        result = await self.db.execute(select(SystemUser).where(SystemUser.username == username))
        return result.scalar_one_or_none()

    async def list_users(self) -> List[SystemUser]:
        result = await self.db.execute(select(SystemUser).order_by(SystemUser.username))
        return list(result.scalars().all())

    # ===========================================
    # ABOUT PROFILE
    # ===========================================

    async def get_about(self) -> Optional[AboutProfile]:
        result = await self.db.execute(select(AboutProfile).limit(1))
        return result.scalar_one_or_none()
