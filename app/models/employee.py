"""
ShiftSync - Employee Model

Employee directory record with salary structure, identity documents and
offboarding/rehire bookkeeping.

Invariant: ``active`` mirrors ``status`` (``active == (status == ACTIVE)``).
Always change either through ``Employee.set_status``.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, Integer, Numeric, String, Text, JSON, Enum as SQLEnum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


# ===========================================
# ENUMS
# ===========================================

class StaffType(str, Enum):
    """Staff classification."""
    OFFICE = "Office"
    WORKER = "Worker"


class Team(str, Enum):
    """Team grouping; drives overtime, holiday and week-off pay eligibility."""
    INTERNAL = "Internal Team"
    EXTERNAL = "External Team"
    OFFICE_STAFF = "Office Staff"


class EmployeeStatus(str, Enum):
    """Directory status."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ExitType(str, Enum):
    """Offboarding exit type."""
    RESIGNATION = "Resignation"
    TERMINATION = "Termination"
    END_OF_CONTRACT = "End of Contract"
    ABSCONDING = "Absconding"


SALARY_COMPONENTS = ("basic", "housing", "transport", "other", "air_ticket", "leave_salary")

DOCUMENT_FIELDS = (
    "emirates_id",
    "emirates_id_expiry",
    "passport_number",
    "passport_expiry",
    "labour_card_number",
    "labour_card_expiry",
)


def _money_column(comment: str) -> Mapped[Optional[Decimal]]:
    return mapped_column(
        Numeric(precision=12, scale=2),
        nullable=True,
        default=Decimal("0.00"),
        comment=comment,
    )


# ===========================================
# EMPLOYEE MODEL
# ===========================================

class Employee(BaseModel):
    """
    Employee model.

    Employees are never physically deleted; offboarding flips them to
    Inactive and rehire flips them back.
    """

    __tablename__ = "employees"

    # Identification
    code: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True,
        comment="Human-facing employee code, e.g. 10001",
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    designation: Mapped[str] = mapped_column(String(150), default="", nullable=False)
    department: Mapped[str] = mapped_column(String(150), default="", nullable=False)
    company: Mapped[str] = mapped_column(String(255), default="", nullable=False, index=True)
    joining_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Classification
    staff_type: Mapped[StaffType] = mapped_column(
        SQLEnum(StaffType), default=StaffType.WORKER, nullable=False,
    )
    team: Mapped[Team] = mapped_column(
        SQLEnum(Team), default=Team.INTERNAL, nullable=False,
    )
    work_location: Mapped[str] = mapped_column(String(150), default="", nullable=False)

    # Leave
    leave_balance: Mapped[int] = mapped_column(
        Integer, default=30, nullable=False,
        comment="Remaining leave days; only approved leave decrements it",
    )

    # Status (kept in sync by set_status)
    status: Mapped[EmployeeStatus] = mapped_column(
        SQLEnum(EmployeeStatus), default=EmployeeStatus.ACTIVE, nullable=False, index=True,
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Salary structure (monthly)
    basic: Mapped[Optional[Decimal]] = _money_column("Basic salary")
    housing: Mapped[Optional[Decimal]] = _money_column("Housing allowance")
    transport: Mapped[Optional[Decimal]] = _money_column("Transport allowance")
    other: Mapped[Optional[Decimal]] = _money_column("Other allowances")
    air_ticket: Mapped[Optional[Decimal]] = _money_column("Air ticket allowance")
    leave_salary: Mapped[Optional[Decimal]] = _money_column("Leave salary")

    # Bank
    bank_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    iban: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Identity documents: emirates_id, passport_number, labour_card_number and their expiries
    documents: Mapped[Optional[dict]] = mapped_column(JSON(none_as_null=True), nullable=True)
    vacation_scheduled_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Offboarding / rehire
    offboarding_details: Mapped[Optional[dict]] = mapped_column(
        JSON(none_as_null=True), nullable=True,
        comment="Exit type, date, reason, settlement breakdown and attachments",
    )
    rejoining_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    rejoining_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("leave_balance >= 0", name="leave_balance_non_negative"),
    )

    @property
    def gross_salary(self) -> Decimal:
        """Sum of all salary components; missing components count as zero."""
        return sum(
            (getattr(self, component) or Decimal("0") for component in SALARY_COMPONENTS),
            Decimal("0"),
        )

    def set_status(self, status: EmployeeStatus) -> None:
        """Set the directory status and keep ``active`` in sync."""
        self.status = EmployeeStatus(status)
        self.active = self.status == EmployeeStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Employee(code={self.code}, name={self.name}, status={self.status})>"
