"""
ShiftSync - Test Configuration

Pytest fixtures and configuration.
"""

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_async_session
from app.models.employee import Employee, EmployeeStatus, StaffType, Team
from app.models.user import SystemUser, UserRole
from app.services.record_store import RecordStore
from app.services.user_service import default_permissions
from app.utils.security import create_access_token, get_password_hash
from main import app


# In-memory SQLite shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    await test_engine.dispose()


@pytest_asyncio.fixture
async def store(db_session: AsyncSession) -> RecordStore:
    return RecordStore(db_session)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ===========================================
# DATA FIXTURES
# ===========================================

async def _add_user(db_session: AsyncSession, username: str, password: str, role: UserRole) -> SystemUser:
    user = SystemUser(
        username=username,
        hashed_password=get_password_hash(password),
        name=username.title(),
        role=role,
        active=True,
        permissions=default_permissions(role),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> SystemUser:
    """The default admin account."""
    return await _add_user(db_session, "admin", "admin123", UserRole.ADMIN)


@pytest_asyncio.fixture
async def engineer_user(db_session: AsyncSession) -> SystemUser:
    """A user holding only dashboard and timesheet permissions."""
    return await _add_user(db_session, "engineer", "Engineer123!", UserRole.ENGINEER)


@pytest_asyncio.fixture
async def auth_headers(admin_user: SystemUser) -> dict:
    token = create_access_token({"sub": admin_user.username, "role": admin_user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def engineer_headers(engineer_user: SystemUser) -> dict:
    token = create_access_token({"sub": engineer_user.username, "role": engineer_user.role.value})
    return {"Authorization": f"Bearer {token}"}


def make_employee(code: str = "10001", name: str = "Aisha Khan", **overrides) -> Employee:
    values = dict(
        code=code,
        name=name,
        designation="Beautician",
        department="Salon",
        company="Al Reem Henna & Beauty Saloon",
        joining_date=date(2024, 1, 1),
        staff_type=StaffType.WORKER,
        team=Team.INTERNAL,
        work_location="Abu Dhabi",
        leave_balance=30,
        basic=Decimal("3000.00"),
        housing=Decimal("1000.00"),
        transport=Decimal("500.00"),
        other=Decimal("0.00"),
        air_ticket=Decimal("0.00"),
        leave_salary=Decimal("0.00"),
    )
    values.update(overrides)
    status = values.pop("status", EmployeeStatus.ACTIVE)
    employee = Employee(**values)
    employee.set_status(status)
    return employee


@pytest_asyncio.fixture
async def employee_factory(db_session: AsyncSession):
    """Persist an employee built from ``make_employee`` overrides."""

    async def _create(code: str, name: str = "Test Employee", **overrides) -> Employee:
        employee = make_employee(code=code, name=name, **overrides)
        db_session.add(employee)
        await db_session.commit()
        await db_session.refresh(employee)
        return employee

    return _create


@pytest_asyncio.fixture
async def test_employee(db_session: AsyncSession) -> Employee:
    """Internal Team worker with a gross salary of 4500."""
    employee = make_employee()
    db_session.add(employee)
    await db_session.commit()
    await db_session.refresh(employee)
    return employee


@pytest_asyncio.fixture
async def office_employee(db_session: AsyncSession) -> Employee:
    """Office Staff employee (no overtime, holiday or week-off pay)."""
    employee = make_employee(
        code="20001",
        name="Omar Saeed",
        designation="Accountant",
        department="Finance",
        staff_type=StaffType.OFFICE,
        team=Team.OFFICE_STAFF,
        basic=Decimal("6000.00"),
        housing=Decimal("0.00"),
        transport=Decimal("0.00"),
    )
    db_session.add(employee)
    await db_session.commit()
    await db_session.refresh(employee)
    return employee


@pytest_asyncio.fixture
async def inactive_employee(db_session: AsyncSession) -> Employee:
    employee = make_employee(code="30001", name="Former Staff", status=EmployeeStatus.INACTIVE)
    db_session.add(employee)
    await db_session.commit()
    await db_session.refresh(employee)
    return employee
