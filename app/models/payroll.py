"""
ShiftSync - Payroll Models

Ad-hoc deductions recorded against an employee. A deduction is not tied to
a payroll run; it is picked up by any payroll computed for the calendar
month its date falls in.
"""

import uuid
from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, ForeignKey, Numeric, Text, Uuid, Enum as SQLEnum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, AuditMixin


class DeductionType(str, Enum):
    """Deduction categories."""
    SALARY_ADVANCE = "Salary Advance"
    LOAN_AMOUNT = "Loan Amount"
    DAMAGE = "Damage"
    FINE = "Fine"
    PENALTY = "Penalty"
    OTHER = "Other"


class DeductionRecord(BaseModel, AuditMixin):
    """Variable deduction against an employee."""

    __tablename__ = "deduction_records"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    deduction_type: Mapped[DeductionType] = mapped_column(SQLEnum(DeductionType), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("amount > 0", name="deduction_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<DeductionRecord(employee_id={self.employee_id}, date={self.date}, amount={self.amount})>"
