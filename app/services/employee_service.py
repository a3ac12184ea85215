"""
ShiftSync - Employee Directory Service

Onboarding, edits, lookups and identity-document expiry tracking.
Employees are never deleted; see the offboarding service for exits.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from app.config import settings
from app.models.employee import Employee, EmployeeStatus, StaffType, Team
from app.services.record_store import RecordStore
from app.utils.dates import normalize_date
from app.utils.error_handling import (
    DuplicateEntryException,
    EmployeeNotFoundException,
    ValidationException,
    parse_choice,
    require_text,
)

logger = logging.getLogger(__name__)

# Enum-typed employee fields accepted as plain values
CHOICE_FIELDS = {
    "status": EmployeeStatus,
    "team": Team,
    "staff_type": StaffType,
}


# ===========================================
# DOCUMENT EXPIRY
# ===========================================

class ExpiryStatus(str, Enum):
    UNKNOWN = "unknown"
    EXPIRED = "expired"
    CRITICAL = "critical"
    WARNING = "warning"
    VALID = "valid"


class DocumentKind(str, Enum):
    EMIRATES_ID = "emirates_id"
    PASSPORT = "passport"
    LABOUR_CARD = "labour_card"

    @property
    def expiry_field(self) -> str:
        return f"{self.value}_expiry"

    @property
    def number_field(self) -> str:
        return _NUMBER_FIELDS[self]


_NUMBER_FIELDS = {
    DocumentKind.EMIRATES_ID: "emirates_id",
    DocumentKind.PASSPORT: "passport_number",
    DocumentKind.LABOUR_CARD: "labour_card_number",
}

# (critical, warning) thresholds in days
EXPIRY_THRESHOLDS = {
    DocumentKind.PASSPORT: (90, 180),
    DocumentKind.EMIRATES_ID: (30, None),
    DocumentKind.LABOUR_CARD: (30, None),
}


def document_expiry_status(
    expiry: Any,
    kind: DocumentKind = DocumentKind.EMIRATES_ID,
    today: Optional[date] = None,
) -> ExpiryStatus:
    """
    Classify a document expiry date.

    Passports are critical within 90 days and a warning within 180 days;
    Emirates ID and labour card are critical within 30 days. Missing or
    unparseable dates are unknown.
    """
    if not expiry:
        return ExpiryStatus.UNKNOWN
    try:
        expiry_date = normalize_date(expiry)
    except ValueError:
        return ExpiryStatus.UNKNOWN

    days_left = (expiry_date - (today or date.today())).days
    if days_left < 0:
        return ExpiryStatus.EXPIRED

    critical, warning = EXPIRY_THRESHOLDS[DocumentKind(kind)]
    if days_left <= critical:
        return ExpiryStatus.CRITICAL
    if warning is not None and days_left <= warning:
        return ExpiryStatus.WARNING
    return ExpiryStatus.VALID


@dataclass
class ExpiringDocument:
    employee_id: uuid.UUID
    employee_code: str
    employee_name: str
    document: DocumentKind
    number: Optional[str]
    expiry: Optional[str]
    status: ExpiryStatus


def documents_to_json(documents: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Document set as JSON-safe values (dates become ISO strings)."""
    if documents is None:
        return None
    return {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in documents.items()
        if value not in (None, "")
    }


# ===========================================
# SERVICE
# ===========================================

def _with_choices(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``data`` with status, team and staff_type resolved to their enums."""
    values = dict(data)
    for key, enum_cls in CHOICE_FIELDS.items():
        if values.get(key) is not None:
            values[key] = parse_choice(enum_cls, values[key], key)
    return values


class EmployeeService:
    """Employee directory."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_employee(self, employee_id: uuid.UUID) -> Employee:
        employee = await self.store.get_employee(employee_id)
        if not employee:
            raise EmployeeNotFoundException(employee_id)
        return employee

    async def list_employees(
        self,
        company: Optional[str] = None,
        team: Optional[Team] = None,
        status: Optional[EmployeeStatus] = None,
        search: Optional[str] = None,
        active_only: bool = False,
    ) -> List[Employee]:
        return await self.store.list_employees(
            active_only=active_only, company=company, team=team, status=status, search=search,
        )

    async def create_employee(self, data: Mapping[str, Any]) -> Employee:
        """
        Onboard an employee.

        Raises:
            MissingFieldException: If code or name is blank
            DuplicateEntryException: If the code is taken
        """
        code = require_text(data.get("code"), "code")
        name = require_text(data.get("name"), "name")
        if await self.store.get_employee_by_code(code):
            raise DuplicateEntryException("Employee", "code", code)

        values = _with_choices(data)
        values["code"] = code
        values["name"] = name
        values.setdefault("joining_date", None)
        if values["joining_date"] is None:
            values["joining_date"] = date.today()
        if values.get("leave_balance") is None:
            values["leave_balance"] = settings.default_leave_balance
        status = values.pop("status", None) or EmployeeStatus.ACTIVE
        values.pop("active", None)
        if "documents" in values:
            values["documents"] = documents_to_json(values["documents"])

        employee = Employee(**{key: value for key, value in values.items() if value is not None})
        employee.set_status(status)
        await self.store.put(employee)
        await self.store.commit()

        logger.info(f"Employee {employee.code} onboarded")
        return employee

    async def update_employee(self, employee_id: uuid.UUID, data: Mapping[str, Any]) -> Employee:
        """
        Partially update an employee.

        Raises:
            DuplicateEntryException: If the new code is taken
            ValidationException: If leave_balance would go negative
        """
        employee = await self.get_employee(employee_id)
        values = _with_choices(data)
        values.pop("id", None)
        values.pop("active", None)

        if "code" in values:
            code = require_text(values["code"], "code")
            existing = await self.store.get_employee_by_code(code)
            if existing and existing.id != employee.id:
                raise DuplicateEntryException("Employee", "code", code)
            values["code"] = code

        if "leave_balance" in values and values["leave_balance"] is not None:
            if values["leave_balance"] < 0:
                raise ValidationException("Leave balance cannot be negative", field="leave_balance")

        if "documents" in values:
            values["documents"] = documents_to_json(values["documents"])

        status = values.pop("status", None)
        for key, value in values.items():
            setattr(employee, key, value)
        if status is not None:
            employee.set_status(status)

        await self.store.put(employee)
        await self.store.commit()
        return employee

    async def list_expiring_documents(self, today: Optional[date] = None) -> List[ExpiringDocument]:
        """Every document of an active employee whose expiry is not valid."""
        today = today or date.today()
        expiring: List[ExpiringDocument] = []
        for employee in await self.store.list_employees(active_only=True):
            documents = employee.documents or {}
            for kind in DocumentKind:
                number = documents.get(kind.number_field)
                expiry = documents.get(kind.expiry_field)
                if not number and not expiry:
                    continue
                status = document_expiry_status(expiry, kind, today)
                if status == ExpiryStatus.VALID:
                    continue
                expiring.append(ExpiringDocument(
                    employee_id=employee.id,
                    employee_code=employee.code,
                    employee_name=employee.name,
                    document=kind,
                    number=number,
                    expiry=expiry,
                    status=status,
                ))
        return expiring
