"""
ShiftSync - Organization Reference Data

Managed company list, public holiday calendar and the About page profile.

Companies are a plain managed list of names. Employee records keep the
company name as a denormalized string, so renaming a company leaves existing
employees untouched unless the rename is explicitly cascaded.
"""

from datetime import date as date_type
from typing import Optional

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel, AuditMixin


class Company(BaseModel):
    """A company name in the managed list."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Company(name={self.name})>"


class PublicHoliday(BaseModel, AuditMixin):
    """
    Public holiday.

    Creating one stamps every active employee's attendance for the date as
    Public Holiday; deleting one does not revert those records.
    """

    __tablename__ = "public_holidays"

    date: Mapped[date_type] = mapped_column(Date, nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    def __repr__(self) -> str:
        return f"<PublicHoliday(date={self.date}, name={self.name})>"


class AboutProfile(BaseModel):
    """Single-row About page content."""

    __tablename__ = "about_profile"

    name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    title: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    bio: Mapped[str] = mapped_column(Text, default="", nullable=False)
    profile_image: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True,
        comment="Encoded image, passed through untouched",
    )
    email: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    contact_info: Mapped[str] = mapped_column(Text, default="", nullable=False)
